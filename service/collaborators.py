"""
Interfaces to the systems that own teachers, classrooms and schedules.

The engine only reads directories and appends to the schedule store; record
management lives elsewhere. The in-memory implementations back the HTTP API,
which receives every record in the request payload.
"""
import uuid
from typing import Iterable, List, Optional, Protocol

from models.schemas import Teacher, Classroom, Schedule


class TeacherDirectory(Protocol):
    async def list_teachers(self) -> List[Teacher]:
        ...


class ClassroomDirectory(Protocol):
    async def list_classrooms(self) -> List[Classroom]:
        ...


class ScheduleStore(Protocol):
    async def list_schedules(self) -> List[Schedule]:
        ...

    async def create_schedule(self, schedule: Schedule) -> Schedule:
        """Persist a new schedule and return it with its assigned id."""
        ...


class InMemoryDirectory:
    """Teacher and classroom directory over fixed lists, preserving their order."""

    def __init__(self, teachers: Optional[Iterable[Teacher]] = None,
                 classrooms: Optional[Iterable[Classroom]] = None):
        self._teachers = list(teachers or [])
        self._classrooms = list(classrooms or [])

    async def list_teachers(self) -> List[Teacher]:
        return list(self._teachers)

    async def list_classrooms(self) -> List[Classroom]:
        return list(self._classrooms)


class InMemoryScheduleStore:
    """Schedule store kept in a list; ids are uuid4 hex strings."""

    def __init__(self, schedules: Optional[Iterable[Schedule]] = None):
        self._schedules: List[Schedule] = [
            s if s.id else s.model_copy(update={"id": uuid.uuid4().hex})
            for s in (schedules or [])
        ]

    async def list_schedules(self) -> List[Schedule]:
        return list(self._schedules)

    async def create_schedule(self, schedule: Schedule) -> Schedule:
        saved = schedule.model_copy(update={"id": uuid.uuid4().hex}, deep=True)
        self._schedules.append(saved)
        return saved
