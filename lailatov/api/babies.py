"""
Coach API - roster, profile edits, archive lifecycle, sleep-record removal.

Routes (/babies), coach session required:
  GET    /                                  - Active babies (optional ?search=)
  GET    /archived                          - Archived babies
  GET    /{baby_id}                         - Full profile, archived or not
  POST   /                                  - Add a baby
  PATCH  /{baby_id}                         - Partial profile update
  PUT    /{baby_id}/coach-notes             - Replace coach notes
  POST   /{baby_id}/archive                 - Move to archive
  POST   /{baby_id}/unarchive               - Restore from archive
  DELETE /{baby_id}                         - Delete permanently
  DELETE /{baby_id}/sleep-records/{rec_id}  - Delete one sleep record
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, status

from lailatov.api.deps import CoachDep, ManagerDep
from lailatov.api.models import (
    BabyCreateRequest,
    BabyListResponse,
    BabySummary,
    BabyUpdateRequest,
    CoachNotesRequest,
    SuccessResponse,
)
from lailatov.db.models import Baby, BabyData
from lailatov.services.babies_data import latest_sleep_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/babies", tags=["babies"])


def _summarize(baby: Baby) -> BabySummary:
    latest = latest_sleep_record(baby)
    return BabySummary(
        id=baby.id,
        name=baby.name,
        family_name=baby.family_name,
        age=baby.age,
        mother_name=baby.mother_name,
        father_name=baby.father_name,
        parent_username=baby.parent_username,
        latest_record_date=latest.date if latest else None,
        is_archived=baby.is_archived,
        date_archived=baby.date_archived,
        last_modified=baby.last_modified,
    )


def _list_response(babies: List[Baby]) -> BabyListResponse:
    return BabyListResponse(babies=[_summarize(b) for b in babies], total_count=len(babies))


def _not_found(baby_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Baby {baby_id} not found")


# Used by: Coach dashboard - baby cards + search box
@router.get("", response_model=BabyListResponse)
async def list_active_babies(
    manager: ManagerDep,
    _coach: CoachDep,
    search: Optional[str] = Query(None, description="Filter by baby, family or parent name"),
):
    return _list_response(await manager.search_active_babies(search))


# Used by: Archive page
@router.get("/archived", response_model=BabyListResponse)
async def list_archived_babies(manager: ManagerDep, _coach: CoachDep):
    return _list_response(await manager.get_archived_babies())


# Used by: Edit-baby page
@router.get("/{baby_id}", response_model=Baby)
async def get_baby(baby_id: str, manager: ManagerDep, _coach: CoachDep):
    baby = await manager.get_baby_by_id(baby_id)
    if baby is None:
        raise _not_found(baby_id)
    return baby


# Used by: Add-baby page
@router.post("", response_model=Baby, status_code=status.HTTP_201_CREATED)
async def create_baby(request: BabyCreateRequest, manager: ManagerDep, _coach: CoachDep):
    if await manager.is_parent_username_taken(request.parent_username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Parent username '{request.parent_username}' is already in use",
        )

    return await manager.create_baby(BabyData(**request.model_dump()))


# Used by: Edit-baby page
@router.patch("/{baby_id}", response_model=Baby)
async def update_baby(baby_id: str, request: BabyUpdateRequest, manager: ManagerDep, _coach: CoachDep):
    baby = await manager.update_baby(baby_id, request.to_changes())
    if baby is None:
        raise _not_found(baby_id)
    return baby


# Used by: Edit-baby page - recommendations box shown to parents
@router.put("/{baby_id}/coach-notes", response_model=Baby)
async def update_coach_notes(baby_id: str, request: CoachNotesRequest, manager: ManagerDep, _coach: CoachDep):
    baby = await manager.update_coach_notes(baby_id, request.coach_notes)
    if baby is None:
        raise _not_found(baby_id)
    return baby


# Used by: Edit-baby page - archive button
@router.post("/{baby_id}/archive", response_model=SuccessResponse)
async def archive_baby(baby_id: str, manager: ManagerDep, _coach: CoachDep):
    if not await manager.archive_baby(baby_id):
        raise _not_found(baby_id)
    return SuccessResponse(success=True, message="Baby moved to archive")


# Used by: Archive page - restore button
@router.post("/{baby_id}/unarchive", response_model=SuccessResponse)
async def unarchive_baby(baby_id: str, manager: ManagerDep, _coach: CoachDep):
    if not await manager.unarchive_baby(baby_id):
        raise _not_found(baby_id)
    return SuccessResponse(success=True, message="Baby restored to active list")


# Used by: Archive page - permanent delete dialog
@router.delete("/{baby_id}", response_model=SuccessResponse)
async def delete_baby(baby_id: str, manager: ManagerDep, _coach: CoachDep):
    if not await manager.delete_baby_permanently(baby_id):
        raise _not_found(baby_id)
    return SuccessResponse(success=True, message="Baby deleted permanently")


# Used by: Edit-baby page - sleep record list
@router.delete("/{baby_id}/sleep-records/{record_id}", response_model=SuccessResponse)
async def delete_sleep_record(baby_id: str, record_id: str, manager: ManagerDep, _coach: CoachDep):
    if not await manager.delete_sleep_record(baby_id, record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sleep record {record_id} not found for baby {baby_id}",
        )
    return SuccessResponse(success=True, message="Sleep record deleted")
