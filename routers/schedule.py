from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from models.schemas import BatchResult, ErrorResponse, GenerateRequest, GenerateWeeklyRequest
from service.assigner import ScheduleAssigner
from service.collaborators import InMemoryDirectory, InMemoryScheduleStore
from service.exceptions import BatchAbortedError
from config import settings

# Create a router instance
router = APIRouter()


def _build_assigner(payload: GenerateRequest) -> ScheduleAssigner:
    directory = InMemoryDirectory(payload.teachers, payload.classrooms)
    return ScheduleAssigner(
        teacher_directory=directory,
        classroom_directory=directory,
        schedule_store=InMemoryScheduleStore(payload.existing_schedules),
        batch_deadline_seconds=settings.batch_deadline_seconds,
        collaborator_timeout_seconds=settings.collaborator_timeout_seconds,
        empty_batch_success_rate=settings.empty_batch_success_rate,
    )


def _aborted_response(exc: BatchAbortedError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, partial=exc.partial)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json")
    )


@router.post(
    "/schedules/generate",
    response_model=BatchResult,
    responses={503: {"model": ErrorResponse}}
)
async def generate_schedules(payload: GenerateRequest):
    """
    Assign each request to a conflict-free teacher and classroom.

    Requests are placed in the order given; each one sees the schedules
    committed by the requests before it.
    """
    assigner = _build_assigner(payload)
    try:
        return await assigner.assign(payload.requests)
    except BatchAbortedError as exc:
        return _aborted_response(exc)


@router.post(
    "/schedules/generate-weekly",
    response_model=BatchResult,
    responses={503: {"model": ErrorResponse}}
)
async def generate_weekly_schedules(payload: GenerateWeeklyRequest):
    """
    Date every request within the given week, then assign them Monday first.
    """
    assigner = _build_assigner(payload)
    try:
        return await assigner.assign_week(payload.requests, payload.week_start)
    except BatchAbortedError as exc:
        return _aborted_response(exc)
