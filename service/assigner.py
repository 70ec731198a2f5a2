"""
First-fit session assignment engine.

Requests are placed one at a time in input order. For each request the
engine walks eligible teachers and, for each teacher, eligible classrooms,
and commits the first pair with no conflict against the schedules already
persisted plus those committed earlier in the same batch.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Awaitable, Callable, List, Sequence, TypeVar

from models.schemas import (
    BatchResult, Classroom, FailureRecord, Schedule, ScheduleRequest, Teacher,
    SCHEDULED, WEEKDAYS
)
from service.collaborators import ClassroomDirectory, ScheduleStore, TeacherDirectory
from service.constraints import (
    check_prerequisites, eligible_classrooms, eligible_teachers, find_conflicts, has_conflict
)
from service.exceptions import BatchAbortedError, CollaboratorError
from service.reporter import build_result

logger = logging.getLogger(__name__)

NO_COMBINATION_REASON = "No available teacher-classroom combination found without conflicts"

T = TypeVar("T")


class ScheduleAssigner:
    """
    Assigns scheduling requests to teacher/classroom pairs without conflicts.

    One instance can run any number of batches; all per-batch state lives in
    local variables of :meth:`assign`.
    """

    def __init__(
        self,
        teacher_directory: TeacherDirectory,
        classroom_directory: ClassroomDirectory,
        schedule_store: ScheduleStore,
        batch_deadline_seconds: float = 0,
        collaborator_timeout_seconds: float = 0,
        empty_batch_success_rate: str = "0%",
    ):
        """
        Initialize the assigner.

        Args:
            teacher_directory: Source of all Teacher records
            classroom_directory: Source of all Classroom records
            schedule_store: Source of committed schedules and sink for new ones
            batch_deadline_seconds: Wall-clock limit for one batch, 0 for none
            collaborator_timeout_seconds: Limit for each collaborator call, 0 for none
            empty_batch_success_rate: Success rate reported for an empty batch
        """
        self.teacher_directory = teacher_directory
        self.classroom_directory = classroom_directory
        self.schedule_store = schedule_store
        self.batch_deadline_seconds = batch_deadline_seconds
        self.collaborator_timeout_seconds = collaborator_timeout_seconds
        self.empty_batch_success_rate = empty_batch_success_rate

    async def assign(self, requests: Sequence[ScheduleRequest]) -> BatchResult:
        """
        Main entry point to assign a batch of requests.

        Args:
            requests: Ordered scheduling requests

        Returns:
            BatchResult with committed schedules, failures and summary

        Raises:
            BatchAbortedError: a collaborator call failed or the batch deadline
                elapsed; ``partial`` holds what was committed before that
        """
        loop = asyncio.get_running_loop()
        deadline = None
        if self.batch_deadline_seconds:
            deadline = loop.time() + self.batch_deadline_seconds

        created: List[Schedule] = []
        failures: List[FailureRecord] = []
        messages = []

        logger.info(f"Assigning batch of {len(requests)} request(s)")

        try:
            # Step 1: Load directories and previously committed schedules once
            teachers = await self._call("Loading teachers", self.teacher_directory.list_teachers)
            classrooms = await self._call("Loading classrooms", self.classroom_directory.list_classrooms)
            committed = list(await self._call("Loading schedules", self.schedule_store.list_schedules))

            # Step 2: Advisory checks on the input
            messages = check_prerequisites(requests, teachers, classrooms)
            for warning in messages:
                logger.warning(warning.message)

            # Step 3: Place requests strictly in order
            for index, request in enumerate(requests):
                if deadline is not None and loop.time() >= deadline:
                    logger.warning(f"Batch deadline reached before request {index + 1}")
                    raise BatchAbortedError(
                        f"Batch deadline of {self.batch_deadline_seconds}s exceeded "
                        f"after {index} of {len(requests)} request(s)",
                        self._partial(created, failures, index, messages),
                    )

                schedule, failure = await self._place(request, teachers, classrooms, committed)
                if schedule is not None:
                    # Later requests must see this commit
                    committed.append(schedule)
                    created.append(schedule)
                else:
                    failures.append(failure)

        except CollaboratorError as exc:
            processed = len(created) + len(failures)
            logger.error(f"Batch aborted after {processed} request(s): {exc.message}", exc_info=True)
            raise BatchAbortedError(
                exc.message, self._partial(created, failures, processed, messages)
            ) from exc

        # Step 4: Summarize
        result = build_result(
            created, failures, len(requests), messages, self.empty_batch_success_rate
        )
        logger.info(
            f"Batch finished: {result.summary.successful} scheduled, "
            f"{result.summary.failed} failed ({result.summary.success_rate})"
        )
        return result

    async def assign_week(self, requests: Sequence[ScheduleRequest], week_start: date) -> BatchResult:
        """
        Assign requests onto the concrete dates of one week.

        Requests are grouped Monday through Sunday (keeping their relative
        order within a day) and each one is dated ``week_start`` plus its
        weekday offset before the batch runs.

        Args:
            requests: Scheduling requests; their own ``date`` is replaced
            week_start: Monday of the target week
        """
        if week_start.weekday() != 0:
            raise ValueError(f"week start {week_start.isoformat()} is not a Monday")

        dated = []
        for offset, day in enumerate(WEEKDAYS):
            current_date = week_start + timedelta(days=offset)
            for request in requests:
                if request.day_of_week == day:
                    dated.append(request.model_copy(update={"date": current_date}))

        return await self.assign(dated)

    # ===========================
    # Helper Methods
    # ===========================

    async def _place(
        self,
        request: ScheduleRequest,
        teachers: List[Teacher],
        classrooms: List[Classroom],
        committed: List[Schedule],
    ):
        """Search one request; returns (schedule, None) on success or (None, failure)."""
        candidate_teachers = eligible_teachers(teachers, request)
        candidate_classrooms = eligible_classrooms(classrooms, request)

        for teacher in candidate_teachers:
            for classroom in candidate_classrooms:
                if has_conflict(teacher.id, classroom.id, request.day_of_week,
                                request.start_time, request.end_time, committed):
                    continue

                schedule = self._build_schedule(request, teacher, classroom)
                saved = await self._call("Saving schedule", lambda: self.schedule_store.create_schedule(schedule))
                logger.debug(
                    f"Scheduled {request.subject} on {request.day_of_week} "
                    f"{request.start_time:%H:%M}-{request.end_time:%H:%M} "
                    f"with {teacher.name} in {classroom.name}"
                )
                return saved, None

        self._log_failure(request, candidate_teachers, candidate_classrooms, committed)
        return None, FailureRecord(
            request=request,
            reason=NO_COMBINATION_REASON,
            eligible_teachers=len(candidate_teachers),
            eligible_classrooms=len(candidate_classrooms),
        )

    def _build_schedule(self, request: ScheduleRequest, teacher: Teacher, classroom: Classroom) -> Schedule:
        """Create an unsaved schedule carrying copies of the teacher and classroom."""
        return Schedule(
            date=request.date,
            day_of_week=request.day_of_week,
            start_time=request.start_time,
            end_time=request.end_time,
            teacher=teacher.model_copy(deep=True),
            classroom=classroom.model_copy(deep=True),
            subject=request.subject,
            notes=request.notes,
            is_recurring=request.is_recurring,
            status=SCHEDULED,
        )

    def _log_failure(self, request, candidate_teachers, candidate_classrooms, committed):
        if not logger.isEnabledFor(logging.INFO):
            return

        blocking = set()
        for teacher in candidate_teachers:
            for classroom in candidate_classrooms:
                for schedule in find_conflicts(teacher.id, classroom.id, request.day_of_week,
                                               request.start_time, request.end_time, committed):
                    blocking.add(id(schedule))

        logger.info(
            f"Could not schedule {request.subject} on {request.day_of_week} "
            f"{request.start_time:%H:%M}-{request.end_time:%H:%M}: "
            f"{len(candidate_teachers)} eligible teacher(s), "
            f"{len(candidate_classrooms)} eligible classroom(s), "
            f"{len(blocking)} blocking schedule(s)"
        )

    async def _call(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        """Make a collaborator call and await it under the configured timeout."""
        try:
            awaitable = call()
            if self.collaborator_timeout_seconds:
                return await asyncio.wait_for(awaitable, timeout=self.collaborator_timeout_seconds)
            return await awaitable
        except Exception as exc:
            raise CollaboratorError(operation, exc) from exc

    def _partial(self, created, failures, processed: int, messages) -> BatchResult:
        return build_result(
            created, failures, processed, messages, self.empty_batch_success_rate
        )
