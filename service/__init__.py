"""
Conflict-free session assignment engine.
"""
from .assigner import ScheduleAssigner, NO_COMBINATION_REASON
from .collaborators import (
    TeacherDirectory,
    ClassroomDirectory,
    ScheduleStore,
    InMemoryDirectory,
    InMemoryScheduleStore
)
from .exceptions import SchedulingError, CollaboratorError, BatchAbortedError

__all__ = [
    "ScheduleAssigner",
    "NO_COMBINATION_REASON",
    "TeacherDirectory",
    "ClassroomDirectory",
    "ScheduleStore",
    "InMemoryDirectory",
    "InMemoryScheduleStore",
    "SchedulingError",
    "CollaboratorError",
    "BatchAbortedError"
]
