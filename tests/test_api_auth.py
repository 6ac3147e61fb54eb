"""Tests for /auth: login rule, cookie session, logout."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "status" in resp.json()


@pytest.mark.asyncio
async def test_login_as_coach(client: AsyncClient):
    resp = await client.post("/auth/login", json={"username": "Coach"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "coach"
    assert data["username"] == "coach"
    assert data["redirect_to"] == "/coach/dashboard"
    assert resp.cookies.get("lailaTovUserRole") == "coach"


@pytest.mark.asyncio
async def test_login_as_parent(client: AsyncClient):
    resp = await client.post("/auth/login", json={"username": "levi-family"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "parent"
    assert data["redirect_to"] == "/parent/levi-family"


@pytest.mark.asyncio
async def test_login_empty_username(client: AsyncClient):
    resp = await client.post("/auth/login", json={"username": "  "})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_me_reflects_session(client: AsyncClient):
    resp = await client.get("/auth/me")
    assert resp.json() == {"username": None, "role": None, "redirect_to": None}

    await client.post("/auth/login", json={"username": "משפחת כהן"})
    resp = await client.get("/auth/me")
    assert resp.json()["username"] == "משפחת כהן"
    assert resp.json()["role"] == "parent"


@pytest.mark.asyncio
async def test_logout_clears_session(coach_client: AsyncClient):
    resp = await coach_client.post("/auth/logout")
    assert resp.status_code == 200

    resp = await coach_client.get("/auth/me")
    assert resp.json()["role"] is None

    resp = await coach_client.get("/babies")
    assert resp.status_code == 403
