"""
Export API - coach downloads.

Routes (/export), coach session required:
  GET /csv             - Zip with one CSV per active baby
  GET /csv/{baby_id}   - CSV for a single baby
  GET /pdf             - Printable RTL HTML report of all active babies
"""

import logging
from urllib.parse import quote
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse, Response

from lailatov.api.deps import CoachDep, ManagerDep
from lailatov.core.constants import CSV_ARCHIVE_FILENAME, MSG_NO_ACTIVE_BABIES
from lailatov.services.export_service import baby_to_csv, build_csv_archive, build_print_report, csv_filename
from lailatov.utils.sleep_records import now_local

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


def _attachment(filename: str) -> dict:
    # RFC 5987 form, filenames carry Hebrew
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


# Used by: Coach sidebar - "export CSV"
@router.get("/csv")
async def export_all_csv(manager: ManagerDep, _coach: CoachDep):
    babies = await manager.get_active_babies()
    if not babies:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MSG_NO_ACTIVE_BABIES)

    logger.info(f"Exporting CSV for {len(babies)} active babies")
    return Response(
        content=build_csv_archive(babies),
        media_type="application/zip",
        headers=_attachment(CSV_ARCHIVE_FILENAME),
    )


# Used by: Edit-baby page - single baby download
@router.get("/csv/{baby_id}")
async def export_baby_csv(baby_id: str, manager: ManagerDep, _coach: CoachDep):
    baby = await manager.get_baby_by_id(baby_id)
    if baby is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Baby {baby_id} not found")

    return Response(
        content=baby_to_csv(baby).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(csv_filename(baby)),
    )


# Used by: Coach sidebar - "export PDF" (printed by the browser)
@router.get("/pdf", response_class=HTMLResponse)
async def export_print_report(manager: ManagerDep, _coach: CoachDep):
    babies = await manager.get_active_babies()
    if not babies:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MSG_NO_ACTIVE_BABIES)

    return HTMLResponse(content=build_print_report(babies, generated_at=now_local()))
