"""Baby-related store operations for the coach and parent flows."""

import logging
from typing import Any, Dict, List, Optional

from lailatov.core.settings import settings
from lailatov.core.store import BabyRepository, get_repository
from lailatov.db.models import Baby, BabyData, SleepCycle, SleepCycleData, SleepRecord, SleepRecordData
from lailatov.utils.latency import simulated_latency
from lailatov.utils.sleep_records import generate_record_id

logger = logging.getLogger(__name__)


class BabyDataManager:
    def __init__(self, repository: Optional[BabyRepository] = None, latency_ms: Optional[int] = None):
        # The in-memory repository defines __len__, so an empty one is falsy
        self.repository = repository if repository is not None else get_repository()
        self.latency_ms = settings.SIMULATED_LATENCY_MS if latency_ms is None else latency_ms

    # Used by: api/parents.py (parent page)
    @simulated_latency
    async def get_baby_by_parent_username(self, username: str) -> Optional[Baby]:
        """Non-archived baby owned by `username`, or None."""
        return self.repository.find_by_parent_username(username)

    # Used by: api/babies.py (edit/restore flows), api/export.py
    @simulated_latency
    async def get_baby_by_id(self, baby_id: str) -> Optional[Baby]:
        return self.repository.find_by_id(baby_id)

    # Used by: api/babies.py (dashboard), api/export.py
    @simulated_latency
    async def get_active_babies(self) -> List[Baby]:
        return self.repository.list_active()

    # Used by: api/babies.py (archive page)
    @simulated_latency
    async def get_archived_babies(self) -> List[Baby]:
        return self.repository.list_archived()

    # Used by: api/babies.py (dashboard search box)
    @simulated_latency
    async def search_active_babies(self, term: Optional[str]) -> List[Baby]:
        """Case-insensitive match on the baby's, family's and parents' names."""
        babies = self.repository.list_active()
        needle = (term or "").strip().lower()
        if not needle:
            return babies

        return [
            baby for baby in babies
            if needle in baby.name.lower()
            or needle in baby.family_name.lower()
            or needle in baby.mother_name.lower()
            or needle in baby.father_name.lower()
        ]

    # Used by: api/babies.py (POST /babies) - archived profiles still own their username
    async def is_parent_username_taken(self, username: str) -> bool:
        return any(b.parent_username == username for b in self.repository.list_all())

    # Used by: api/babies.py (POST /babies)
    async def create_baby(self, baby_data: BabyData) -> Baby:
        baby = self.repository.create(baby_data)
        logger.info(f"Created baby {baby.id} ({baby.name} {baby.family_name}) for parent '{baby.parent_username}'")
        return baby

    # Used by: api/babies.py (PATCH /babies/{id}), self.update_coach_notes()
    async def update_baby(self, baby_id: str, changes: Dict[str, Any]) -> Optional[Baby]:
        """Merge `changes` over the stored baby. Returns the updated baby, or None if unknown."""
        if not self.repository.update(baby_id, changes):
            logger.warning(f"Update failed, baby {baby_id} not found")
            return None

        logger.info(f"Updated baby {baby_id}: {sorted(changes.keys())}")
        return self.repository.find_by_id(baby_id)

    # Used by: api/babies.py (PUT /babies/{id}/coach-notes)
    async def update_coach_notes(self, baby_id: str, coach_notes: str) -> Optional[Baby]:
        return await self.update_baby(baby_id, {"coach_notes": coach_notes})

    # Used by: api/babies.py (POST /babies/{id}/archive)
    async def archive_baby(self, baby_id: str) -> bool:
        archived = self.repository.archive(baby_id)
        if archived:
            logger.info(f"Archived baby {baby_id}")
        else:
            logger.warning(f"Archive failed, baby {baby_id} not found")
        return archived

    # Used by: api/babies.py (POST /babies/{id}/unarchive)
    async def unarchive_baby(self, baby_id: str) -> bool:
        restored = self.repository.unarchive(baby_id)
        if restored:
            logger.info(f"Restored baby {baby_id} from archive")
        else:
            logger.warning(f"Unarchive failed, baby {baby_id} not found")
        return restored

    # Used by: api/babies.py (DELETE /babies/{id})
    async def delete_baby_permanently(self, baby_id: str) -> bool:
        deleted = self.repository.delete_permanently(baby_id)
        if deleted:
            logger.info(f"Permanently deleted baby {baby_id}")
        else:
            logger.warning(f"Delete failed, baby {baby_id} not found")
        return deleted

    # Used by: api/parents.py (POST /parents/{username}/sleep-records)
    async def add_sleep_record(self, baby_id: str, record_data: SleepRecordData) -> Optional[SleepRecord]:
        """Prepend a new record with fresh record and cycle ids. None if the baby is unknown."""
        baby = self.repository.find_by_id(baby_id)
        if baby is None:
            logger.warning(f"Cannot add sleep record, baby {baby_id} not found")
            return None

        taken = {r.id for r in baby.sleep_records}
        record_id = generate_record_id("sr")
        while record_id in taken:
            record_id = generate_record_id("sr")

        record = SleepRecord(
            id=record_id,
            date=record_data.date,
            stage=record_data.stage,
            sleep_cycles=[_build_cycle(data) for data in record_data.sleep_cycles],
        )
        self.repository.update(baby_id, {"sleep_records": [record] + baby.sleep_records})
        logger.info(f"Added sleep record {record.id} ({record.date}) for baby {baby_id}")
        return record

    # Used by: api/parents.py (PUT /parents/{username}/sleep-records/{record_id})
    async def update_sleep_record(
            self,
            baby_id: str,
            record_id: str,
            record_data: SleepRecordData
    ) -> Optional[SleepRecord]:
        """
        Replace a record wholesale. The record id is kept, and cycle ids are kept
        by position; cycles beyond the old count get new ids.
        """
        baby = self.repository.find_by_id(baby_id)
        if baby is None:
            logger.warning(f"Cannot edit sleep record, baby {baby_id} not found")
            return None

        existing = next((r for r in baby.sleep_records if r.id == record_id), None)
        if existing is None:
            logger.warning(f"Sleep record {record_id} not found for baby {baby_id}")
            return None

        cycles = []
        for index, data in enumerate(record_data.sleep_cycles):
            cycle_id = existing.sleep_cycles[index].id if index < len(existing.sleep_cycles) else None
            cycles.append(_build_cycle(data, cycle_id))

        updated = SleepRecord(
            id=existing.id,
            date=record_data.date,
            stage=record_data.stage,
            sleep_cycles=cycles,
        )
        records = [updated if r.id == record_id else r for r in baby.sleep_records]
        self.repository.update(baby_id, {"sleep_records": records})
        logger.info(f"Updated sleep record {record_id} for baby {baby_id}")
        return updated

    # Used by: api/babies.py (DELETE /babies/{id}/sleep-records/{record_id})
    async def delete_sleep_record(self, baby_id: str, record_id: str) -> bool:
        deleted = self.repository.delete_sleep_record(baby_id, record_id)
        if deleted:
            logger.info(f"Deleted sleep record {record_id} for baby {baby_id}")
        else:
            logger.warning(f"Sleep record {record_id} or baby {baby_id} not found")
        return deleted


# Used by: BabyDataManager.add_sleep_record(), BabyDataManager.update_sleep_record()
def _build_cycle(data: SleepCycleData, cycle_id: Optional[str] = None) -> SleepCycle:
    return SleepCycle(
        id=cycle_id or generate_record_id("sc"),
        bedtime=data.bedtime,
        time_to_sleep=data.time_to_sleep,
        who_put_to_sleep=data.who_put_to_sleep,
        how_fell_asleep=data.how_fell_asleep,
        wake_time=data.wake_time or None,  # empty form field means not woken yet
    )


# Used by: api/parents.py, api/babies.py (summary), export_service.py
def latest_sleep_record(baby: Baby) -> Optional[SleepRecord]:
    """Most recent record; the store always hands out records sorted newest first."""
    return baby.sleep_records[0] if baby.sleep_records else None
