"""
Summaries of a finished (or aborted) batch.
"""
import math
from collections import Counter
from typing import List, Optional, Sequence

from models.schemas import (
    BatchResult, BatchSummary, FailureRecord, Schedule, ScheduleStatistics, WarningMessage
)


def format_success_rate(successful: int, total: int, empty: str = "0%") -> str:
    """
    Format the share of successful requests as a rounded percentage.

    Halves round up (49.5 -> "50%"). ``empty`` is returned for a batch with
    no requests instead of dividing by zero.
    """
    if total == 0:
        return empty

    return f"{math.floor(successful / total * 100 + 0.5)}%"


def build_statistics(schedules: Sequence[Schedule]) -> ScheduleStatistics:
    """Count committed schedules per teacher, classroom, subject and day."""
    return ScheduleStatistics(
        total_schedules=len(schedules),
        teacher_utilization=dict(Counter(s.teacher.name for s in schedules)),
        classroom_utilization=dict(Counter(s.classroom.name for s in schedules)),
        subject_distribution=dict(Counter(s.subject for s in schedules)),
        day_distribution=dict(Counter(s.day_of_week for s in schedules)),
    )


def build_result(
    schedules: List[Schedule],
    failures: List[FailureRecord],
    total_requests: int,
    messages: Optional[List[WarningMessage]] = None,
    empty_success_rate: str = "0%",
) -> BatchResult:
    """
    Assemble the batch result.

    Args:
        schedules: Schedules committed by this batch, in commit order
        failures: Failure records, in request order
        total_requests: Number of requests submitted to the batch
        messages: Advisory warnings collected before assignment
        empty_success_rate: Success rate reported when ``total_requests`` is 0

    Returns:
        BatchResult with summary and statistics
    """
    summary = BatchSummary(
        total_requests=total_requests,
        successful=len(schedules),
        failed=len(failures),
        success_rate=format_success_rate(len(schedules), total_requests, empty_success_rate),
    )

    return BatchResult(
        schedules=list(schedules),
        failed_requests=list(failures),
        summary=summary,
        statistics=build_statistics(schedules),
        messages=list(messages or []),
    )
