from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from typing import List, Dict, Optional, Literal
import datetime as dt


DayOfWeek = Literal[
    "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"
]

WEEKDAYS: List[str] = [
    "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"
]

SCHEDULED = "scheduled"


def _normalize_day(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


def _parse_hhmm(value):
    """Accept HH:MM strings alongside time objects; times are whole minutes."""
    if isinstance(value, str):
        return dt.datetime.strptime(value.strip(), "%H:%M").time()
    if isinstance(value, dt.time) and (value.second or value.microsecond):
        raise ValueError(f"time {value.isoformat()} must be in whole minutes (HH:MM)")
    return value


class _TimeRangeModel(BaseModel):
    """Shared HH:MM parsing and serialization for models carrying a time range."""

    @field_validator("start_time", "end_time", mode="before", check_fields=False)
    @classmethod
    def _parse_times(cls, value):
        return _parse_hhmm(value)

    @field_validator("day_of_week", mode="before", check_fields=False)
    @classmethod
    def _parse_day(cls, value):
        return _normalize_day(value)

    @field_serializer("start_time", "end_time", check_fields=False)
    def _format_times(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


# ===========================
# Directory Models
# ===========================

class Teacher(BaseModel):
    """A teacher and the single availability window reused on each available day"""
    id: str
    name: str
    subject: str
    available_days: List[DayOfWeek] = []
    available_start_time: dt.time
    available_end_time: dt.time

    @field_validator("available_days", mode="before")
    @classmethod
    def _parse_days(cls, value):
        if isinstance(value, (list, tuple)):
            return [_normalize_day(d) for d in value]
        return value

    @field_validator("available_start_time", "available_end_time", mode="before")
    @classmethod
    def _parse_window(cls, value):
        return _parse_hhmm(value)

    @field_serializer("available_start_time", "available_end_time")
    def _format_window(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class Classroom(BaseModel):
    id: str
    name: str
    room_type: str   # e.g. "Lecture Room", "Laboratory"
    capacity: int = Field(ge=0)


# ===========================
# Request Schema
# ===========================

class ScheduleRequest(_TimeRangeModel):
    """One session to place; yields at most one committed Schedule"""
    model_config = ConfigDict(frozen=True)

    subject: str
    room_type: str
    required_capacity: int = Field(ge=0)
    day_of_week: DayOfWeek
    start_time: dt.time
    end_time: dt.time
    date: Optional[dt.date] = None
    notes: str = ""
    is_recurring: bool = False

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_time >= self.end_time:
            raise ValueError(
                f"start time ({self.start_time:%H:%M}) must be before end time ({self.end_time:%H:%M})"
            )
        return self


# ===========================
# Committed Schedule
# ===========================

class Schedule(_TimeRangeModel):
    """
    A committed assignment.

    ``teacher`` and ``classroom`` are copies taken at commit time, so later
    edits to the directory records do not reach already-committed schedules.
    """
    id: Optional[str] = None
    date: Optional[dt.date] = None
    day_of_week: DayOfWeek
    start_time: dt.time
    end_time: dt.time
    teacher: Teacher
    classroom: Classroom
    subject: str
    notes: str = ""
    is_recurring: bool = False
    status: str = SCHEDULED


# ===========================
# Response Schema
# ===========================

class FailureRecord(BaseModel):
    """A request that found no conflict-free teacher/classroom pair"""
    request: ScheduleRequest
    reason: str
    # Filter-stage counts; they are not reduced by conflicts found afterwards.
    eligible_teachers: int
    eligible_classrooms: int


class BatchSummary(BaseModel):
    total_requests: int
    successful: int
    failed: int
    success_rate: str  # e.g. "67%"


class ScheduleStatistics(BaseModel):
    """Committed-schedule counts grouped by teacher, classroom, subject and day"""
    total_schedules: int = 0
    teacher_utilization: Dict[str, int] = {}
    classroom_utilization: Dict[str, int] = {}
    subject_distribution: Dict[str, int] = {}
    day_distribution: Dict[str, int] = {}


class WarningMessage(BaseModel):
    """Advisory message about the batch input"""
    title: str
    message: str


class BatchResult(BaseModel):
    """Complete outcome of one batch run"""
    schedules: List[Schedule] = []
    failed_requests: List[FailureRecord] = []
    summary: BatchSummary
    statistics: ScheduleStatistics = ScheduleStatistics()
    messages: List[WarningMessage] = []


# ===========================
# API Payloads
# ===========================

class GenerateRequest(BaseModel):
    """Self-contained batch payload: directories, prior schedules and requests"""
    teachers: List[Teacher] = []
    classrooms: List[Classroom] = []
    existing_schedules: List[Schedule] = []
    requests: List[ScheduleRequest] = []


class GenerateWeeklyRequest(GenerateRequest):
    week_start: dt.date

    @field_validator("week_start")
    @classmethod
    def _must_be_monday(cls, value: dt.date) -> dt.date:
        if value.weekday() != 0:
            raise ValueError(f"week start {value.isoformat()} is not a Monday")
        return value


class ErrorResponse(BaseModel):
    """Batch aborted by an infrastructure failure"""
    error: str
    partial: Optional[BatchResult] = None
