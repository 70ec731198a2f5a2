"""
Exceptions raised by the assignment engine.

An unschedulable request is not an exception: it is reported per request as a
FailureRecord and never aborts the batch. Only infrastructure failures do.
"""
from typing import Optional

from models.schemas import BatchResult


class SchedulingError(Exception):
    """Base class for all engine exceptions."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class CollaboratorError(SchedulingError):
    """A teacher directory, classroom directory or schedule store call failed."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {str(cause) or type(cause).__name__}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class BatchAbortedError(SchedulingError):
    """
    The batch stopped before every request was processed.

    ``partial`` holds the schedules already committed and the failures already
    recorded when the batch stopped; requests after that point were not tried.
    """

    def __init__(self, message: str, partial: BatchResult):
        super().__init__(message)
        self.partial = partial
