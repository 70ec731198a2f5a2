"""
Pure checks used by the assignment engine.

Nothing here touches a collaborator or mutates its arguments, so each check
can be called any number of times while searching for a candidate pair.
"""
from datetime import time
from typing import Iterable, List, Sequence

from models.schemas import Teacher, Classroom, Schedule, ScheduleRequest, WarningMessage


def times_overlap(start1: time, end1: time, start2: time, end2: time) -> bool:
    """
    Check if two time-of-day ranges overlap.

    Strict comparison: a range ending exactly when the other starts does not
    overlap it, so back-to-back sessions are always allowed.
    """
    return start1 < end2 and start2 < end1


def is_teacher_available(teacher: Teacher, day: str, start_time: time, end_time: time) -> bool:
    """Check that the teacher works on ``day`` and their window covers the whole range."""
    if day not in teacher.available_days:
        return False

    return teacher.available_start_time <= start_time and teacher.available_end_time >= end_time


def eligible_teachers(teachers: Iterable[Teacher], request: ScheduleRequest) -> List[Teacher]:
    """Teachers of the requested subject available for the requested slot, in source order."""
    return [
        teacher for teacher in teachers
        if teacher.subject == request.subject
        and is_teacher_available(teacher, request.day_of_week, request.start_time, request.end_time)
    ]


def eligible_classrooms(classrooms: Iterable[Classroom], request: ScheduleRequest) -> List[Classroom]:
    """Classrooms of the requested type seating at least the required capacity, in source order."""
    return [
        classroom for classroom in classrooms
        if classroom.room_type == request.room_type
        and classroom.capacity >= request.required_capacity
    ]


def clashes_with(
    schedule: Schedule,
    teacher_id: str,
    classroom_id: str,
    day: str,
    start_time: time,
    end_time: time,
) -> bool:
    """Check one committed schedule against a candidate; the calendar date is ignored."""
    if schedule.day_of_week != day:
        return False
    if schedule.teacher.id != teacher_id and schedule.classroom.id != classroom_id:
        return False
    return times_overlap(schedule.start_time, schedule.end_time, start_time, end_time)


def find_conflicts(
    teacher_id: str,
    classroom_id: str,
    day: str,
    start_time: time,
    end_time: time,
    committed: Sequence[Schedule],
) -> List[Schedule]:
    """
    Get committed schedules that clash with a candidate assignment.

    A schedule clashes when it falls on the same day, overlaps the requested
    range, and uses the candidate teacher or the candidate classroom. The two
    axes are independent: either one is enough.

    Args:
        teacher_id: Candidate teacher identity
        classroom_id: Candidate classroom identity
        day: Requested day of week
        start_time: Requested start
        end_time: Requested end
        committed: Persisted schedules plus those committed earlier in the batch

    Returns:
        Clashing schedules in ``committed`` order
    """
    return [
        schedule for schedule in committed
        if clashes_with(schedule, teacher_id, classroom_id, day, start_time, end_time)
    ]


def has_conflict(
    teacher_id: str,
    classroom_id: str,
    day: str,
    start_time: time,
    end_time: time,
    committed: Sequence[Schedule],
) -> bool:
    """Check if a candidate assignment clashes with any committed schedule."""
    return any(
        clashes_with(schedule, teacher_id, classroom_id, day, start_time, end_time)
        for schedule in committed
    )


def check_prerequisites(
    requests: Sequence[ScheduleRequest],
    teachers: Sequence[Teacher],
    classrooms: Sequence[Classroom],
) -> List[WarningMessage]:
    """
    Warn about requested subjects and room types nobody can cover.

    The warnings are advisory: affected requests still go through the batch
    and fail there with their own FailureRecord.
    """
    warnings = []

    taught_subjects = {t.subject for t in teachers}
    offered_room_types = {c.room_type for c in classrooms}

    missing_subjects = []
    missing_room_types = []
    for request in requests:
        if request.subject not in taught_subjects and request.subject not in missing_subjects:
            missing_subjects.append(request.subject)
        if request.room_type not in offered_room_types and request.room_type not in missing_room_types:
            missing_room_types.append(request.room_type)

    for subject in missing_subjects:
        warnings.append(WarningMessage(
            title="Missing Teacher",
            message=f"No teacher is assigned to subject '{subject}'"
        ))

    for room_type in missing_room_types:
        warnings.append(WarningMessage(
            title="Missing Classroom",
            message=f"No classroom of type '{room_type}' exists"
        ))

    return warnings
