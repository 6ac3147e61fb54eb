"""
Parent API - the family's own baby page and nightly sleep logging.

Routes (/parents), session of the matching parent (or the coach) required:
  GET  /{parent_username}                             - Baby profile + latest record
  POST /{parent_username}/sleep-records               - Log a new sleep record
  PUT  /{parent_username}/sleep-records/{record_id}   - Edit an existing record
"""

import logging
from fastapi import APIRouter, HTTPException, status

from lailatov.api.deps import ManagerDep, ParentDep
from lailatov.api.models import ParentBabyResponse, SleepRecordRequest
from lailatov.db.models import Baby, SleepRecord
from lailatov.services.babies_data import BabyDataManager, latest_sleep_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parents", tags=["parents"])


async def _baby_for_parent(manager: BabyDataManager, parent_username: str) -> Baby:
    baby = await manager.get_baby_by_parent_username(parent_username)
    if baby is None:
        # Archived babies are hidden from parents too
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No baby is linked to this username. Check the username or contact your sleep coach.",
        )
    return baby


# Used by: Parent page
@router.get("/{parent_username}", response_model=ParentBabyResponse)
async def get_parent_baby(parent_username: str, manager: ManagerDep, _session: ParentDep):
    baby = await _baby_for_parent(manager, parent_username)
    return ParentBabyResponse(baby=baby, latest_record=latest_sleep_record(baby))


# Used by: Parent page - sleep data form
@router.post("/{parent_username}/sleep-records", response_model=SleepRecord, status_code=status.HTTP_201_CREATED)
async def add_sleep_record(
    parent_username: str,
    request: SleepRecordRequest,
    manager: ManagerDep,
    _session: ParentDep,
):
    baby = await _baby_for_parent(manager, parent_username)
    record = await manager.add_sleep_record(baby.id, request)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Baby {baby.id} not found")
    logger.info(f"Parent '{parent_username}' logged sleep for {record.date}")
    return record


# Used by: Parent page - edit record dialog
@router.put("/{parent_username}/sleep-records/{record_id}", response_model=SleepRecord)
async def update_sleep_record(
    parent_username: str,
    record_id: str,
    request: SleepRecordRequest,
    manager: ManagerDep,
    _session: ParentDep,
):
    baby = await _baby_for_parent(manager, parent_username)
    record = await manager.update_sleep_record(baby.id, record_id, request)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sleep record {record_id} not found",
        )
    return record
