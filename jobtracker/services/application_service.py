"""Application service: the recorder and engines wired to a repository."""

import logging
from collections.abc import Callable
from datetime import datetime

from jobtracker.core.exceptions import NotFoundError, ValidationError
from jobtracker.core.storage import ApplicationRepository, get_repository
from jobtracker.schemas.analytics import AnalyticsStats
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationUpdate,
    JobApplication,
    JobStatus,
    NoteType,
    utc_now,
)
from jobtracker.schemas.query import ApplicationPage, FilterCriteria, SortBy
from jobtracker.services import lifecycle
from jobtracker.services.analytics import compute_analytics
from jobtracker.services.query import filter_and_sort
from jobtracker.utils.sanitize import sanitize_application
from jobtracker.utils.validators import validate_application_data

logger = logging.getLogger(__name__)


class ApplicationService:
    """Core service for tracking job applications.

    Each mutation is one load and one save. The new state is built in memory
    first, so a failed save leaves the stored application untouched.
    """

    def __init__(
        self,
        repository: ApplicationRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.clock = clock

    async def list_applications(self, owner_id: str) -> list[JobApplication]:
        """Return every application owned by ``owner_id``."""
        return await self.repository.load_applications(owner_id)

    async def get_application(
        self, owner_id: str, application_id: str
    ) -> JobApplication:
        """Return one of the owner's applications or raise NotFoundError."""
        app = await self.repository.get_application(application_id)
        if app is None or app.user_id != owner_id:
            raise NotFoundError("Application", application_id)
        return app

    async def create_application(
        self, owner_id: str, data: ApplicationCreate
    ) -> JobApplication:
        """Validate and store a new application."""
        now = self.clock()
        self._validate(data, now)
        app = lifecycle.create_application(sanitize_application(data), owner_id, now)
        saved = await self.repository.save_application(app)
        logger.info(f"Created application {saved.id} for {owner_id}")
        return saved

    async def change_status(
        self, owner_id: str, application_id: str, new_status: JobStatus | str
    ) -> JobApplication:
        """Record a status transition; a same-status request stores nothing."""
        app = await self.get_application(owner_id, application_id)
        updated = lifecycle.apply_status_change(app, new_status, self.clock())
        if updated is app:
            return app
        return await self.repository.save_application(updated)

    async def add_note(
        self,
        owner_id: str,
        application_id: str,
        content: str,
        note_type: NoteType | str = NoteType.GENERAL,
    ) -> JobApplication:
        """Attach a note to an application."""
        app = await self.get_application(owner_id, application_id)
        updated = lifecycle.add_note(app, content, note_type, self.clock())
        return await self.repository.save_application(updated)

    async def schedule_interview(
        self, owner_id: str, application_id: str, interview_date: datetime
    ) -> JobApplication:
        """Set an application's interview date."""
        app = await self.get_application(owner_id, application_id)
        updated = lifecycle.schedule_interview(app, interview_date, self.clock())
        if updated is app:
            return app
        return await self.repository.save_application(updated)

    async def update_application(
        self, owner_id: str, application_id: str, changes: ApplicationUpdate
    ) -> JobApplication:
        """Apply a partial edit to an application."""
        now = self.clock()
        app = await self.get_application(owner_id, application_id)
        checked = changes
        if changes.interview_date is not None and changes.application_date is None:
            checked = changes.model_copy(
                update={"application_date": app.application_date}
            )
        self._validate(checked, now)
        updated = lifecycle.update_details(app, sanitize_application(changes), now)
        if updated is app:
            return app
        saved = await self.repository.save_application(updated)
        logger.info(f"Updated application {application_id}")
        return saved

    async def delete_application(self, owner_id: str, application_id: str) -> bool:
        """Delete one of the owner's applications."""
        await self.get_application(owner_id, application_id)
        deleted = await self.repository.delete_application(application_id)
        if not deleted:
            raise NotFoundError("Application", application_id)
        logger.info(f"Deleted application {application_id}")
        return deleted

    async def get_analytics(self, owner_id: str) -> AnalyticsStats:
        """Compute analytics over the owner's current applications."""
        applications = await self.repository.load_applications(owner_id)
        return compute_analytics(applications, self.clock())

    async def search(
        self,
        owner_id: str,
        query: str = "",
        filters: FilterCriteria | None = None,
        sort: SortBy = "date-desc",
        page: int = 1,
    ) -> ApplicationPage:
        """Return one page of the owner's applications matching the criteria."""
        applications = await self.repository.load_applications(owner_id)
        return filter_and_sort(applications, query, filters, sort, page)

    def _validate(self, data: ApplicationCreate | ApplicationUpdate, now: datetime):
        result = validate_application_data(data, now)
        if not result.is_valid:
            raise ValidationError(result.error, field=result.field)
        for warning in result.warnings:
            logger.warning(warning)


def create_application_service(
    repository: ApplicationRepository | None = None,
) -> ApplicationService:
    """Factory function for dependency injection."""
    return ApplicationService(repository or get_repository())
