"""API routes for tracked job applications."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from jobtracker.core.exceptions import (
    NotFoundError,
    StorageError,
    TrackerError,
    ValidationError,
    not_found_exception,
    storage_exception,
    validation_exception,
)
from jobtracker.schemas.analytics import AnalyticsStats
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationUpdate,
    InterviewScheduleRequest,
    JobApplication,
    JobStatus,
    NoteCreate,
    StatusChangeRequest,
)
from jobtracker.schemas.query import ApplicationPage, FilterCriteria, SortBy
from jobtracker.services.application_service import (
    ApplicationService,
    create_application_service,
)
from jobtracker.services.export import application_report, export_csv, summary_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


DEFAULT_USER_ID = "single_user"  # Single-user mode for personal use


def get_current_user_id(
    user_id: str = Query(default=DEFAULT_USER_ID, description="Owner of the data"),
) -> str:
    """Get current user ID.

    Note: token-based identity lives outside this service; the owner is taken
    from the query string and defaults to the single local user.
    """
    return user_id


async def get_application_service() -> ApplicationService:
    """Create application service with the configured repository."""
    return create_application_service()


def get_filter_criteria(
    status: JobStatus | None = None,
    company: str | None = Query(default=None, max_length=100),
    job_role: str | None = Query(default=None, max_length=100),
    start_date: date | None = None,
    end_date: date | None = None,
    has_interview: bool | None = None,
    has_notes: bool | None = None,
    min_salary: int | None = Query(default=None, gt=0),
    max_salary: int | None = Query(default=None, gt=0),
) -> FilterCriteria:
    """Collect structured filters from the query string."""
    return FilterCriteria(
        status=status,
        company=company,
        job_role=job_role,
        start_date=start_date,
        end_date=end_date,
        has_interview=has_interview,
        has_notes=has_notes,
        min_salary=min_salary,
        max_salary=max_salary,
    )


def _to_http_exception(error: TrackerError) -> HTTPException:
    """Map a domain error onto the matching HTTP response."""
    if isinstance(error, NotFoundError):
        return not_found_exception(error.message)
    if isinstance(error, ValidationError):
        return validation_exception(error.message, error.field)
    if isinstance(error, StorageError):
        logger.error(f"Storage failure: {error.message}")
        return storage_exception("Storage unavailable, please retry")
    logger.error(f"Unexpected tracker error: {error.message}")
    return HTTPException(status_code=500, detail=error.message)


@router.get("", response_model=ApplicationPage)
async def list_applications(
    q: str = Query(default="", max_length=100, description="Free-text search"),
    sort: SortBy = Query(default="date-desc"),
    page: int = Query(default=1, ge=1),
    filters: FilterCriteria = Depends(get_filter_criteria),
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Search, filter, sort and page the user's applications."""
    try:
        return await service.search(user_id, q, filters, sort, page)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.post("", response_model=JobApplication, status_code=201)
async def create_application(
    request: ApplicationCreate,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Start tracking a new application."""
    try:
        return await service.create_application(user_id, request)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.get("/analytics", response_model=AnalyticsStats)
async def get_analytics(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Aggregate statistics over all of the user's applications."""
    try:
        return await service.get_analytics(user_id)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.get("/export.csv", response_class=PlainTextResponse)
async def export_applications_csv(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Download all applications as CSV."""
    try:
        applications = await service.list_applications(user_id)
    except TrackerError as e:
        raise _to_http_exception(e)
    return PlainTextResponse(
        export_csv(applications),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="job_applications.csv"'},
    )


@router.get("/summary", response_class=PlainTextResponse)
async def export_summary(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Text summary of the whole job search."""
    try:
        applications = await service.list_applications(user_id)
    except TrackerError as e:
        raise _to_http_exception(e)
    return PlainTextResponse(summary_report(applications, service.clock()))


@router.get("/{application_id}", response_model=JobApplication)
async def get_application(
    application_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Get one application with its history, notes and activities."""
    try:
        return await service.get_application(user_id, application_id)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.put("/{application_id}", response_model=JobApplication)
async def update_application(
    application_id: str,
    request: ApplicationUpdate,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Edit an application's details."""
    try:
        return await service.update_application(user_id, application_id, request)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.delete("/{application_id}")
async def delete_application(
    application_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Delete an application."""
    try:
        await service.delete_application(user_id, application_id)
    except TrackerError as e:
        raise _to_http_exception(e)
    return {"success": True}


@router.post("/{application_id}/status", response_model=JobApplication)
async def change_status(
    application_id: str,
    request: StatusChangeRequest,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Move an application to another status."""
    try:
        return await service.change_status(user_id, application_id, request.status)
    except TrackerError as e:
        raise _to_http_exception(e)


@router.post("/{application_id}/notes", response_model=JobApplication)
async def add_note(
    application_id: str,
    request: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Attach a note to an application."""
    try:
        return await service.add_note(
            user_id, application_id, request.content, request.type
        )
    except TrackerError as e:
        raise _to_http_exception(e)


@router.post("/{application_id}/interview", response_model=JobApplication)
async def schedule_interview(
    application_id: str,
    request: InterviewScheduleRequest,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Set the interview date for an application."""
    try:
        return await service.schedule_interview(
            user_id, application_id, request.interview_date
        )
    except TrackerError as e:
        raise _to_http_exception(e)


@router.get("/{application_id}/report", response_class=PlainTextResponse)
async def get_application_report(
    application_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    """Text report for a single application."""
    try:
        app = await service.get_application(user_id, application_id)
    except TrackerError as e:
        raise _to_http_exception(e)
    return PlainTextResponse(application_report(app))
