"""Schemas for tracked job applications and their history."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Pipeline stage of an application, in canonical order."""

    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    ON_HOLD = "OnHold"


class NoteType(str, Enum):
    """Kind of note attached to an application."""

    GENERAL = "general"
    INTERVIEW = "interview"
    FOLLOWUP = "followup"


class ActivityType(str, Enum):
    """Kind of audit-log entry."""

    APPLICATION_CREATED = "application_created"
    STATUS_CHANGE = "status_change"
    NOTE_ADDED = "note_added"
    INTERVIEW_SCHEDULED = "interview_scheduled"


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


Timestamp = Annotated[datetime, AfterValidator(ensure_aware)]


class StatusHistoryEntry(BaseModel):
    """A single status the application entered and when."""

    model_config = ConfigDict(frozen=True)

    status: JobStatus
    changed_at: Timestamp


class Note(BaseModel):
    """Immutable note owned by one application."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str = Field(..., min_length=1)
    type: NoteType = NoteType.GENERAL
    created_at: Timestamp


class Activity(BaseModel):
    """Append-only audit-log entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ActivityType
    timestamp: Timestamp
    description: str
    metadata: dict[str, Any] | None = None


class JobApplication(BaseModel):
    """Root aggregate: one tracked job application."""

    id: str
    user_id: str
    company: str
    job_role: str
    status: JobStatus
    application_date: Timestamp
    last_updated: Timestamp
    notes: str = ""
    salary: str | None = None
    job_url: str | None = None
    interview_date: Timestamp | None = None
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    notes_list: list[Note] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)


class ApplicationCreate(BaseModel):
    """Request to start tracking a new application."""

    company: str = Field(..., min_length=2, max_length=100)
    job_role: str = Field(..., min_length=2, max_length=100)
    status: JobStatus = Field(default=JobStatus.APPLIED)
    application_date: Timestamp = Field(..., description="May be backdated")
    notes: str = Field(default="", max_length=5000)
    salary: str | None = Field(default=None, max_length=100)
    job_url: str | None = Field(default=None, max_length=500)
    interview_date: Timestamp | None = None


class ApplicationUpdate(BaseModel):
    """Partial edit of an application; unset fields are left alone."""

    company: str | None = Field(default=None, min_length=2, max_length=100)
    job_role: str | None = Field(default=None, min_length=2, max_length=100)
    status: JobStatus | None = None
    application_date: Timestamp | None = None
    notes: str | None = Field(default=None, max_length=5000)
    salary: str | None = Field(default=None, max_length=100)
    job_url: str | None = Field(default=None, max_length=500)
    interview_date: Timestamp | None = None


class StatusChangeRequest(BaseModel):
    """Request to move an application to another status."""

    status: JobStatus


class NoteCreate(BaseModel):
    """Request to attach a note."""

    content: str
    type: NoteType = NoteType.GENERAL


class InterviewScheduleRequest(BaseModel):
    """Request to set the interview date."""

    interview_date: Timestamp
