"""Record ordering, partial merges and modification timestamps for baby profiles."""

import copy
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytz

from lailatov.core.settings import settings
from lailatov.db.models import Baby, SleepRecord, IMMUTABLE_BABY_FIELDS


# Used by: advance_timestamp(), store.py (archive), seed_demo_data.py
def now_local() -> datetime:
    return datetime.now(pytz.timezone(settings.TIMEZONE))


# Used by: store.py - every successful mutation
def advance_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged past `previous` so last_modified strictly increases."""
    current = now_local()
    if previous is not None and current <= previous:
        current = previous + timedelta(microseconds=1)
    return current


# Used by: store.py, babies_data.py, export_service.py
def sort_records_desc(records: List[SleepRecord]) -> List[SleepRecord]:
    """Most recent first. Stable, so records sharing a date keep their order."""
    return sorted(records, key=lambda r: r.date, reverse=True)


# Used by: store.py (update)
def merge_baby(existing: Baby, partial: Dict[str, Any]) -> Baby:
    """
    Field-by-field merge of `partial` over `existing`, returning a new Baby.

    Unknown keys and immutable fields (id, parent_username) are skipped.
    Nested collections are deep-copied so the result shares nothing with
    either input.
    """
    data = existing.model_dump()
    for field, value in partial.items():
        if field in IMMUTABLE_BABY_FIELDS or field not in Baby.model_fields:
            continue
        data[field] = copy.deepcopy(value)

    merged = Baby.model_validate(data)
    if "sleep_records" in partial:
        merged.sleep_records = sort_records_desc(merged.sleep_records)
    return merged


# Used by: babies_data.py - ids for submitted records and cycles
def generate_record_id(prefix: str = "sr") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
