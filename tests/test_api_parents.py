"""Tests for the parent /parents routes."""

import pytest
from httpx import AsyncClient

SLEEP_FORM = {
    "date": "2024-07-22",
    "stage": "ביסוס הרגלים",
    "sleep_cycles": [
        {
            "bedtime": "19:45",
            "time_to_sleep": "15 דקות",
            "who_put_to_sleep": "אבא",
            "how_fell_asleep": "שיר ערש",
            "wake_time": "",
        },
    ],
}


@pytest.mark.asyncio
async def test_parent_sees_own_baby(parent_client: AsyncClient):
    resp = await parent_client.get("/parents/levi-family")
    assert resp.status_code == 200
    data = resp.json()
    assert data["baby"]["id"] == "2"
    assert data["baby"]["coach_notes"]
    assert data["latest_record"]["id"] == "sr2"


@pytest.mark.asyncio
async def test_parent_cannot_see_other_family(parent_client: AsyncClient):
    assert (await parent_client.get("/parents/cohen-family")).status_code == 403
    assert (await parent_client.get("/parents/Levi-Family")).status_code == 403


@pytest.mark.asyncio
async def test_anonymous_is_rejected(client: AsyncClient):
    assert (await client.get("/parents/levi-family")).status_code == 403


@pytest.mark.asyncio
async def test_coach_can_open_parent_page(coach_client: AsyncClient):
    assert (await coach_client.get("/parents/cohen-family")).status_code == 200


@pytest.mark.asyncio
async def test_unknown_or_archived_baby_is_not_found(client: AsyncClient):
    await client.post("/auth/login", json={"username": "nobody-family"})
    assert (await client.get("/parents/nobody-family")).status_code == 404

    await client.post("/auth/login", json={"username": "coach"})
    await client.post("/babies/2/archive")
    await client.post("/auth/login", json={"username": "levi-family"})
    assert (await client.get("/parents/levi-family")).status_code == 404


@pytest.mark.asyncio
async def test_add_sleep_record(parent_client: AsyncClient):
    resp = await parent_client.post("/parents/levi-family/sleep-records", json=SLEEP_FORM)
    assert resp.status_code == 201
    record = resp.json()
    assert record["date"] == "2024-07-22"
    assert record["sleep_cycles"][0]["wake_time"] is None

    data = (await parent_client.get("/parents/levi-family")).json()
    assert data["latest_record"]["id"] == record["id"]
    assert [r["date"] for r in data["baby"]["sleep_records"]] == ["2024-07-22", "2024-07-21"]


@pytest.mark.asyncio
async def test_add_sleep_record_validation(parent_client: AsyncClient):
    bad_time = {**SLEEP_FORM, "sleep_cycles": [{**SLEEP_FORM["sleep_cycles"][0], "bedtime": "25:00"}]}
    assert (await parent_client.post("/parents/levi-family/sleep-records", json=bad_time)).status_code == 422

    bad_wake = {**SLEEP_FORM, "sleep_cycles": [{**SLEEP_FORM["sleep_cycles"][0], "wake_time": "7am"}]}
    assert (await parent_client.post("/parents/levi-family/sleep-records", json=bad_wake)).status_code == 422

    no_cycles = {**SLEEP_FORM, "sleep_cycles": []}
    assert (await parent_client.post("/parents/levi-family/sleep-records", json=no_cycles)).status_code == 422

    no_stage = {**SLEEP_FORM, "stage": " "}
    assert (await parent_client.post("/parents/levi-family/sleep-records", json=no_stage)).status_code == 422


@pytest.mark.asyncio
async def test_edit_sleep_record(parent_client: AsyncClient):
    form = {**SLEEP_FORM, "date": "2024-07-21", "stage": "שלב חדש"}
    resp = await parent_client.put("/parents/levi-family/sleep-records/sr2", json=form)
    assert resp.status_code == 200
    record = resp.json()
    assert record["id"] == "sr2"
    assert record["stage"] == "שלב חדש"
    assert record["sleep_cycles"][0]["id"] == "sc3"

    assert (await parent_client.put("/parents/levi-family/sleep-records/missing", json=form)).status_code == 404
