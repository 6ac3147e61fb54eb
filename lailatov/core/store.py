"""In-memory baby store - the process-wide owner of every Baby, SleepRecord and SleepCycle."""

from typing import Any, Dict, Iterable, List, Optional, Protocol

from lailatov.db.models import Baby, BabyData
from lailatov.utils.sleep_records import advance_timestamp, merge_baby, now_local, sort_records_desc


class BabyRepository(Protocol):
    """Operations the service layer relies on. Reads never mutate; writes report success as bool."""

    def find_by_parent_username(self, username: str) -> Optional[Baby]: ...

    def find_by_id(self, baby_id: str) -> Optional[Baby]: ...

    def list_active(self) -> List[Baby]: ...

    def list_archived(self) -> List[Baby]: ...

    def list_all(self) -> List[Baby]: ...

    def create(self, baby_data: BabyData) -> Baby: ...

    def update(self, baby_id: str, partial: Dict[str, Any]) -> bool: ...

    def archive(self, baby_id: str) -> bool: ...

    def unarchive(self, baby_id: str) -> bool: ...

    def delete_permanently(self, baby_id: str) -> bool: ...

    def delete_sleep_record(self, baby_id: str, record_id: str) -> bool: ...


class InMemoryBabyRepository:
    """
    List-backed store. All operations are synchronous and never await, so on a
    single event loop they run to completion without interleaving.

    Returned babies are deep copies with records sorted by date descending;
    mutating them has no effect on the store.
    """

    def __init__(self, babies: Optional[Iterable[Baby]] = None):
        self._babies: List[Baby] = []
        self._next_id = 1
        if babies:
            self.load(babies)

    def __len__(self) -> int:
        return len(self._babies)

    # Used by: seed_demo_data.py, tests - bulk insert of fully-formed babies
    def load(self, babies: Iterable[Baby]) -> None:
        for baby in babies:
            stored = baby.model_copy(deep=True)
            stored.sleep_records = sort_records_desc(stored.sleep_records)
            self._babies.append(stored)
            if stored.id.isdigit():
                self._next_id = max(self._next_id, int(stored.id) + 1)

    def _index_of(self, baby_id: str) -> Optional[int]:
        for i, baby in enumerate(self._babies):
            if baby.id == baby_id:
                return i
        return None

    @staticmethod
    def _snapshot(baby: Baby) -> Baby:
        copy = baby.model_copy(deep=True)
        copy.sleep_records = sort_records_desc(copy.sleep_records)
        return copy

    def _allocate_id(self) -> str:
        taken = {b.id for b in self._babies}
        while str(self._next_id) in taken:
            self._next_id += 1
        new_id = str(self._next_id)
        self._next_id += 1
        return new_id

    # ── reads ──────────────────────────────────────────────────────────────

    def find_by_parent_username(self, username: str) -> Optional[Baby]:
        for baby in self._babies:
            if not baby.is_archived and baby.parent_username == username:
                return self._snapshot(baby)
        return None

    def find_by_id(self, baby_id: str) -> Optional[Baby]:
        index = self._index_of(baby_id)
        if index is None:
            return None
        return self._snapshot(self._babies[index])

    def list_active(self) -> List[Baby]:
        return [self._snapshot(b) for b in self._babies if not b.is_archived]

    def list_archived(self) -> List[Baby]:
        return [self._snapshot(b) for b in self._babies if b.is_archived]

    def list_all(self) -> List[Baby]:
        return [self._snapshot(b) for b in self._babies]

    # ── writes ─────────────────────────────────────────────────────────────

    def create(self, baby_data: BabyData) -> Baby:
        baby = Baby(
            **baby_data.model_dump(),
            id=self._allocate_id(),
            coach_notes="",
            sleep_records=[],
            is_archived=False,
            date_archived=None,
            last_modified=now_local(),
        )
        self._babies.append(baby)
        return self._snapshot(baby)

    def update(self, baby_id: str, partial: Dict[str, Any]) -> bool:
        index = self._index_of(baby_id)
        if index is None:
            return False
        existing = self._babies[index]
        merged = merge_baby(existing, partial)
        merged.last_modified = advance_timestamp(existing.last_modified)
        self._babies[index] = merged
        return True

    def archive(self, baby_id: str) -> bool:
        index = self._index_of(baby_id)
        if index is None:
            return False
        baby = self._babies[index]
        if baby.is_archived:
            return True
        timestamp = advance_timestamp(baby.last_modified)
        baby.is_archived = True
        baby.date_archived = timestamp
        baby.last_modified = timestamp
        return True

    def unarchive(self, baby_id: str) -> bool:
        index = self._index_of(baby_id)
        if index is None:
            return False
        baby = self._babies[index]
        if not baby.is_archived:
            return True
        baby.is_archived = False
        baby.date_archived = None
        baby.last_modified = advance_timestamp(baby.last_modified)
        return True

    def delete_permanently(self, baby_id: str) -> bool:
        index = self._index_of(baby_id)
        if index is None:
            return False
        del self._babies[index]
        return True

    def delete_sleep_record(self, baby_id: str, record_id: str) -> bool:
        index = self._index_of(baby_id)
        if index is None:
            return False
        baby = self._babies[index]
        remaining = [r for r in baby.sleep_records if r.id != record_id]
        if len(remaining) == len(baby.sleep_records):
            return False
        baby.sleep_records = remaining
        baby.last_modified = advance_timestamp(baby.last_modified)
        return True


_repository: Optional[InMemoryBabyRepository] = None


# Used by: main.py lifespan (seeding), api/deps.py (default manager)
def get_repository() -> InMemoryBabyRepository:
    global _repository
    if _repository is None:
        _repository = InMemoryBabyRepository()
    return _repository
