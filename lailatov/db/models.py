"""Pydantic models for the coaching dataset - babies, sleep records, sleep cycles."""

from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import List, Optional


# Used by: SleepRecord, export_service.py, babies_data.py (record submission)
class SleepCycle(BaseModel):
    """One sleep attempt. wake_time stays None until the baby has woken."""
    id: str
    bedtime: str
    time_to_sleep: str
    who_put_to_sleep: str
    how_fell_asleep: str
    wake_time: Optional[str] = None

    class Config:
        from_attributes = True


# Used by: Baby, export_service.py, babies_data.py, utils/sleep_records.py
class SleepRecord(BaseModel):
    id: str
    date: date
    stage: str
    sleep_cycles: List[SleepCycle] = Field(default_factory=list)

    class Config:
        from_attributes = True


# Used by: store.py, babies_data.py, api/babies.py, api/parents.py, export_service.py
class Baby(BaseModel):
    id: str
    name: str
    family_name: str
    age: int  # months
    mother_name: str
    father_name: str
    siblings_count: int = 0
    siblings_names: Optional[str] = None
    description: Optional[str] = None
    parent_username: str
    coach_notes: Optional[str] = None
    sleep_records: List[SleepRecord] = Field(default_factory=list)
    is_archived: bool = False
    date_archived: Optional[datetime] = None
    last_modified: datetime

    class Config:
        from_attributes = True


# Used by: store.py (create), api/babies.py (POST /babies)
class BabyData(BaseModel):
    """Fields the coach supplies when adding a baby; everything else is assigned by the store."""
    name: str
    family_name: str
    age: int
    mother_name: str
    father_name: str
    siblings_count: int = 0
    siblings_names: Optional[str] = None
    description: Optional[str] = None
    parent_username: str


# Used by: store.py (update) - fields that a partial update may never overwrite
IMMUTABLE_BABY_FIELDS = frozenset({"id", "parent_username"})


# Used by: SleepRecordData, babies_data.py (add/update sleep record)
class SleepCycleData(BaseModel):
    """A cycle as submitted by a parent, before the service assigns its id."""
    bedtime: str
    time_to_sleep: str
    who_put_to_sleep: str
    how_fell_asleep: str
    wake_time: Optional[str] = None


# Used by: babies_data.py (add/update sleep record), api/models.py
class SleepRecordData(BaseModel):
    date: date
    stage: str
    sleep_cycles: List[SleepCycleData]
