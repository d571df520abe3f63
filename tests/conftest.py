"""Pytest configuration and fixtures."""

import os
import sys
from datetime import UTC, datetime

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before importing jobtracker modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("PAGE_SIZE", "10")

FIXED_NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed wall-clock time used by services under test."""
    return FIXED_NOW


@pytest.fixture
def make_application():
    """Factory for JobApplication instances with a seeded history."""
    from jobtracker.schemas.application import (
        Activity,
        ActivityType,
        JobApplication,
        JobStatus,
        StatusHistoryEntry,
    )

    counter = {"value": 0}

    def _make(
        company="Acme Corp",
        job_role="Backend Engineer",
        status=JobStatus.APPLIED,
        application_date=datetime(2025, 1, 10, tzinfo=UTC),
        last_updated=None,
        user_id="user_001",
        **extra,
    ):
        counter["value"] += 1
        updated = last_updated or application_date
        return JobApplication(
            id=f"app-{counter['value']:03d}",
            user_id=user_id,
            company=company,
            job_role=job_role,
            status=status,
            application_date=application_date,
            last_updated=updated,
            status_history=[StatusHistoryEntry(status=status, changed_at=updated)],
            activities=[
                Activity(
                    id=f"act-{counter['value']:03d}",
                    type=ActivityType.APPLICATION_CREATED,
                    timestamp=updated,
                    description="Application submitted",
                )
            ],
            **extra,
        )

    return _make


@pytest.fixture
def sample_create():
    """Sample ApplicationCreate payload."""
    from jobtracker.schemas.application import ApplicationCreate, JobStatus

    return ApplicationCreate(
        company="Acme Corp",
        job_role="Backend Engineer",
        status=JobStatus.APPLIED,
        application_date=datetime(2025, 3, 1, tzinfo=UTC),
        notes="Referred by a former colleague",
        salary="$120,000",
        job_url="https://jobs.example.com/acme/123",
    )


@pytest.fixture
def repository():
    """Empty in-memory repository."""
    from jobtracker.core.storage import InMemoryApplicationRepository

    return InMemoryApplicationRepository()


@pytest.fixture
def service(repository, now):
    """ApplicationService over the in-memory repository with a fixed clock."""
    from jobtracker.services.application_service import ApplicationService

    return ApplicationService(repository, clock=lambda: now)
