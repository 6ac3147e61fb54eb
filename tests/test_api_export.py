"""Tests for the coach /export routes."""

import io
import zipfile
from urllib.parse import quote

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_export_requires_coach(parent_client: AsyncClient):
    assert (await parent_client.get("/export/csv")).status_code == 403
    assert (await parent_client.get("/export/pdf")).status_code == 403


@pytest.mark.asyncio
async def test_export_all_csv_skips_archived(coach_client: AsyncClient):
    await coach_client.post("/babies/3/archive")

    resp = await coach_client.get("/export/csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/zip"
    with zipfile.ZipFile(io.BytesIO(resp.content)) as archive:
        assert sorted(archive.namelist()) == sorted([
            "LailaTov_Data_אורי_כהן.csv",
            "LailaTov_Data_נועה_לוי.csv",
        ])


@pytest.mark.asyncio
async def test_export_single_csv(coach_client: AsyncClient):
    resp = await coach_client.get("/export/csv/2")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert quote("LailaTov_Data_נועה_לוי.csv") in resp.headers["content-disposition"]
    text = resp.content.decode("utf-8")
    assert text.startswith("\ufeff")
    assert "2024-07-21" in text

    assert (await coach_client.get("/export/csv/999")).status_code == 404


@pytest.mark.asyncio
async def test_export_with_no_active_babies(coach_client: AsyncClient):
    for baby_id in ("1", "2", "3"):
        await coach_client.post(f"/babies/{baby_id}/archive")

    resp = await coach_client.get("/export/csv")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "אין תינוקות פעילים לייצוא."
    assert (await coach_client.get("/export/pdf")).status_code == 404


@pytest.mark.asyncio
async def test_export_print_report(coach_client: AsyncClient):
    resp = await coach_client.get("/export/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert 'dir="rtl"' in resp.text
    assert resp.text.count("<section>") == 3
