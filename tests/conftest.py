"""Pytest configuration and shared fixtures. Every test gets its own in-memory store."""

import os
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read at import time; keep tests free of artificial delay and auto-seeding
os.environ.setdefault("SIMULATED_LATENCY_MS", "0")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from lailatov.api.deps import get_baby_manager
from lailatov.core.store import InMemoryBabyRepository
from lailatov.db.models import BabyData, SleepCycle, SleepRecord
from lailatov.db.seed_demo_data import build_demo_babies
from lailatov.main import app
from lailatov.services.babies_data import BabyDataManager


def make_baby_data(**overrides) -> BabyData:
    data = {
        "name": "Noa",
        "family_name": "Levi",
        "age": 8,
        "mother_name": "Rivka",
        "father_name": "Yaakov",
        "siblings_count": 1,
        "siblings_names": "Daniel (3)",
        "description": "Wakes up several times a night",
        "parent_username": "levi-family",
    }
    data.update(overrides)
    return BabyData(**data)


def make_record(record_id: str, day: date, cycles: int = 1, stage: str = "adjustment") -> SleepRecord:
    return SleepRecord(
        id=record_id,
        date=day,
        stage=stage,
        sleep_cycles=[
            SleepCycle(
                id=f"{record_id}-c{i}",
                bedtime="19:00",
                time_to_sleep="20 min",
                who_put_to_sleep="mom",
                how_fell_asleep="lullaby",
                wake_time="06:00",
            )
            for i in range(cycles)
        ],
    )


@pytest.fixture
def empty_repository():
    return InMemoryBabyRepository()


@pytest.fixture
def repository():
    """Store seeded with the demo roster (ids 1-3)."""
    return InMemoryBabyRepository(build_demo_babies())


@pytest.fixture
def manager(repository):
    return BabyDataManager(repository=repository, latency_ms=0)


@pytest_asyncio.fixture
async def client(manager):
    app.dependency_overrides[get_baby_manager] = lambda: manager
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def coach_client(client):
    resp = await client.post("/auth/login", json={"username": "coach"})
    assert resp.status_code == 200
    return client


@pytest_asyncio.fixture
async def parent_client(client):
    """Logged in as the Levi family (demo baby id 2)."""
    resp = await client.post("/auth/login", json={"username": "levi-family"})
    assert resp.status_code == 200
    return client
