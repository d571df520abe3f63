"""Tests for ApplicationService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest

from jobtracker.core.exceptions import NotFoundError, StorageError, ValidationError
from jobtracker.core.storage import InMemoryApplicationRepository
from jobtracker.schemas.application import ApplicationUpdate, JobStatus
from jobtracker.schemas.query import FilterCriteria
from jobtracker.services.application_service import (
    ApplicationService,
    create_application_service,
)


class TestCreateApplication:
    """Tests for creating applications."""

    @pytest.mark.asyncio
    async def test_create_stores_application(self, service, repository, sample_create, now):
        app = await service.create_application("user_001", sample_create)

        stored = await repository.get_application(app.id)
        assert stored is not None
        assert stored.user_id == "user_001"
        assert stored.last_updated == now
        assert stored.activities[0].description == "Application submitted"

    @pytest.mark.asyncio
    async def test_future_date_rejected(self, service, repository, sample_create):
        data = sample_create.model_copy(
            update={"application_date": datetime(2025, 4, 1, tzinfo=UTC)}
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.create_application("user_001", data)

        assert exc_info.value.field == "application_date"
        assert await repository.load_applications("user_001") == []

    @pytest.mark.asyncio
    async def test_input_sanitized(self, service, sample_create):
        data = sample_create.model_copy(update={"company": "  Acme\x00 Corp  "})

        app = await service.create_application("user_001", data)

        assert app.company == "Acme Corp"


class TestOwnership:
    """Tests for owner scoping."""

    @pytest.mark.asyncio
    async def test_unknown_id(self, service):
        with pytest.raises(NotFoundError):
            await service.get_application("user_001", "app-missing")

    @pytest.mark.asyncio
    async def test_other_owner_cannot_see(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        with pytest.raises(NotFoundError):
            await service.get_application("user_002", app.id)
        with pytest.raises(NotFoundError):
            await service.change_status("user_002", app.id, JobStatus.OFFER)

    @pytest.mark.asyncio
    async def test_list_is_scoped(self, service, sample_create):
        await service.create_application("user_001", sample_create)
        await service.create_application("user_002", sample_create)

        assert len(await service.list_applications("user_001")) == 1


class TestMutations:
    """Tests for status, note, interview and detail changes."""

    @pytest.mark.asyncio
    async def test_change_status(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        updated = await service.change_status("user_001", app.id, "Interview")

        assert updated.status == JobStatus.INTERVIEW
        stored = await service.get_application("user_001", app.id)
        assert [entry.status for entry in stored.status_history] == [
            JobStatus.APPLIED,
            JobStatus.INTERVIEW,
        ]

    @pytest.mark.asyncio
    async def test_same_status_skips_save(self, service, repository, sample_create):
        app = await service.create_application("user_001", sample_create)

        with patch.object(repository, "save_application", new=AsyncMock()) as mock_save:
            result = await service.change_status("user_001", app.id, JobStatus.APPLIED)

        mock_save.assert_not_called()
        assert result.status_history == app.status_history

    @pytest.mark.asyncio
    async def test_failed_save_leaves_state_unchanged(
        self, service, repository, sample_create
    ):
        app = await service.create_application("user_001", sample_create)
        failing = AsyncMock(side_effect=StorageError("save", "disk full"))

        with patch.object(repository, "save_application", new=failing):
            with pytest.raises(StorageError):
                await service.change_status("user_001", app.id, JobStatus.OFFER)

        stored = await service.get_application("user_001", app.id)
        assert stored.status == JobStatus.APPLIED
        assert len(stored.status_history) == 1
        assert len(stored.activities) == 1

    @pytest.mark.asyncio
    async def test_add_note(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        updated = await service.add_note("user_001", app.id, "Call back Friday", "followup")

        assert updated.notes_list[-1].content == "Call back Friday"
        assert updated.activities[-1].description == "Follow-up added"

    @pytest.mark.asyncio
    async def test_empty_note_rejected(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        with pytest.raises(ValidationError) as exc_info:
            await service.add_note("user_001", app.id, "   ")

        assert exc_info.value.field == "content"

    @pytest.mark.asyncio
    async def test_schedule_interview(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)
        when = datetime(2025, 3, 20, 10, 0, tzinfo=UTC)

        updated = await service.schedule_interview("user_001", app.id, when)

        assert updated.interview_date == when
        assert updated.activities[-1].description == "Interview scheduled for 2025-03-20"

    @pytest.mark.asyncio
    async def test_update_application(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        updated = await service.update_application(
            "user_001", app.id, ApplicationUpdate(salary="$130,000", status=JobStatus.OFFER)
        )

        assert updated.salary == "$130,000"
        assert updated.status == JobStatus.OFFER
        assert updated.company == "Acme Corp"

    @pytest.mark.asyncio
    async def test_update_rejects_future_date(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        with pytest.raises(ValidationError):
            await service.update_application(
                "user_001",
                app.id,
                ApplicationUpdate(application_date=datetime(2026, 1, 1, tzinfo=UTC)),
            )

    @pytest.mark.asyncio
    async def test_update_warns_on_interview_before_stored_date(
        self, service, sample_create
    ):
        app = await service.create_application("user_001", sample_create)
        early = datetime(2025, 2, 20, tzinfo=UTC)

        with patch("jobtracker.services.application_service.logger") as mock_logger:
            updated = await service.update_application(
                "user_001", app.id, ApplicationUpdate(interview_date=early)
            )

        mock_logger.warning.assert_called_once_with(
            "Interview date is before the application date"
        )
        assert updated.interview_date == early
        assert updated.application_date == app.application_date

    @pytest.mark.asyncio
    async def test_delete(self, service, sample_create):
        app = await service.create_application("user_001", sample_create)

        assert await service.delete_application("user_001", app.id) is True
        with pytest.raises(NotFoundError):
            await service.delete_application("user_001", app.id)


class TestReadModels:
    """Tests for analytics and search."""

    @pytest.mark.asyncio
    async def test_analytics(self, service, sample_create):
        first = await service.create_application("user_001", sample_create)
        await service.create_application("user_001", sample_create)
        await service.change_status("user_001", first.id, JobStatus.OFFER)

        stats = await service.get_analytics("user_001")

        assert stats.total_applications == 2
        assert stats.by_status["Offer"] == 1
        assert stats.success_rate == 50
        assert stats.this_month == 2
        assert stats.monthly_trends[-1].month == "Mar 25"

    @pytest.mark.asyncio
    async def test_search(self, service, sample_create):
        await service.create_application("user_001", sample_create)
        other = sample_create.model_copy(update={"company": "Globex", "salary": None})
        await service.create_application("user_001", other)

        page = await service.search(
            "user_001", query="globex", filters=FilterCriteria(status=JobStatus.APPLIED)
        )

        assert page.total == 1
        assert page.items[0].company == "Globex"


class TestFactory:
    """Tests for create_application_service."""

    def test_uses_given_repository(self):
        repository = InMemoryApplicationRepository()
        service = create_application_service(repository)
        assert isinstance(service, ApplicationService)
        assert service.repository is repository

    def test_defaults_to_configured_repository(self):
        with patch(
            "jobtracker.services.application_service.get_repository"
        ) as mock_get_repository:
            service = create_application_service()
        assert service.repository is mock_get_repository.return_value
