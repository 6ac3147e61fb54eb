"""Pydantic request/response models for all API endpoints. Field-level validation lives here."""

import re
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from lailatov.db.models import Baby, BabyData, SleepCycleData, SleepRecord, SleepRecordData

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _require_text(value: str, min_length: int = 1) -> str:
    stripped = value.strip()
    if len(stripped) < min_length:
        raise ValueError(f"Must contain at least {min_length} characters")
    return stripped


# ── auth ─────────────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    username: str


class SessionResponse(BaseModel):
    username: Optional[str] = None
    role: Optional[str] = None
    redirect_to: Optional[str] = None


# ── babies ───────────────────────────────────────────────────────────────────

class BabyCreateRequest(BabyData):
    age: int = Field(..., ge=0, le=36)
    siblings_count: int = Field(0, ge=0)

    @field_validator('name', 'family_name', 'mother_name', 'father_name')
    @classmethod
    def names_min_length(cls, v):
        return _require_text(v, 2)

    @field_validator('parent_username')
    @classmethod
    def username_min_length(cls, v):
        return _require_text(v, 3)


class BabyUpdateRequest(BaseModel):
    """Every field optional; only the ones sent are changed. parent_username cannot change."""
    name: Optional[str] = None
    family_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=36)
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    siblings_count: Optional[int] = Field(None, ge=0)
    siblings_names: Optional[str] = None
    description: Optional[str] = None
    coach_notes: Optional[str] = None

    @field_validator('name', 'family_name', 'mother_name', 'father_name')
    @classmethod
    def names_min_length(cls, v):
        if v is None:
            return v
        return _require_text(v, 2)

    def to_changes(self) -> dict:
        """Fields the client actually sent. An explicit null only clears the optional text fields."""
        clearable = {'siblings_names', 'description', 'coach_notes'}
        return {
            k: v for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k in clearable
        }


class CoachNotesRequest(BaseModel):
    coach_notes: str


class BabySummary(BaseModel):
    """Dashboard/archive card."""
    id: str
    name: str
    family_name: str
    age: int
    mother_name: str
    father_name: str
    parent_username: str
    latest_record_date: Optional[date] = None
    is_archived: bool
    date_archived: Optional[datetime] = None
    last_modified: datetime


class BabyListResponse(BaseModel):
    babies: List[BabySummary]
    total_count: int


class SuccessResponse(BaseModel):
    success: bool
    message: str


# ── sleep records ────────────────────────────────────────────────────────────

class SleepCycleRequest(SleepCycleData):
    @field_validator('bedtime')
    @classmethod
    def bedtime_format(cls, v):
        if not TIME_PATTERN.match(v):
            raise ValueError('Invalid time format (HH:MM)')
        return v

    @field_validator('wake_time')
    @classmethod
    def wake_time_format(cls, v):
        if v is None or v == '':
            return None
        if not TIME_PATTERN.match(v):
            raise ValueError('Invalid time format (HH:MM), or leave empty')
        return v

    @field_validator('time_to_sleep', 'who_put_to_sleep', 'how_fell_asleep')
    @classmethod
    def required_text(cls, v):
        return _require_text(v)


class SleepRecordRequest(SleepRecordData):
    sleep_cycles: List[SleepCycleRequest] = Field(..., min_length=1)

    @field_validator('stage')
    @classmethod
    def stage_required(cls, v):
        return _require_text(v)


class ParentBabyResponse(BaseModel):
    """Parent page: the baby plus the record shown in the "latest update" card."""
    baby: Baby
    latest_record: Optional[SleepRecord] = None
