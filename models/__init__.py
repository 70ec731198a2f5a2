"""
Data models and Pydantic schemas for the session assignment API.
"""
from .schemas import (
    DayOfWeek,
    WEEKDAYS,
    SCHEDULED,
    Teacher,
    Classroom,
    ScheduleRequest,
    Schedule,
    FailureRecord,
    BatchSummary,
    ScheduleStatistics,
    WarningMessage,
    BatchResult,
    GenerateRequest,
    GenerateWeeklyRequest,
    ErrorResponse
)

__all__ = [
    "DayOfWeek",
    "WEEKDAYS",
    "SCHEDULED",
    "Teacher",
    "Classroom",
    "ScheduleRequest",
    "Schedule",
    "FailureRecord",
    "BatchSummary",
    "ScheduleStatistics",
    "WarningMessage",
    "BatchResult",
    "GenerateRequest",
    "GenerateWeeklyRequest",
    "ErrorResponse"
]
