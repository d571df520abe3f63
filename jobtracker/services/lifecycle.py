"""Lifecycle recorder for job applications.

Every function here takes the current application state and a requested change
and returns the *new* state with the matching status-history and activity
entries appended. Inputs are never mutated, so a caller that fails to persist
the result is left with exactly what it had before.
"""

import logging
import uuid
from datetime import datetime

from jobtracker.core.config import settings
from jobtracker.core.exceptions import ValidationError
from jobtracker.schemas.application import (
    Activity,
    ActivityType,
    ApplicationCreate,
    ApplicationUpdate,
    JobApplication,
    JobStatus,
    Note,
    NoteType,
    StatusHistoryEntry,
    ensure_aware,
    utc_now,
)
from jobtracker.utils.sanitize import sanitize_text

logger = logging.getLogger(__name__)

NOTE_TYPE_LABELS = {
    NoteType.GENERAL: "General Note",
    NoteType.INTERVIEW: "Interview Note",
    NoteType.FOLLOWUP: "Follow-up",
}


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _resolve_now(now: datetime | None) -> datetime:
    return ensure_aware(now) if now is not None else utc_now()


def _effective_time(app: JobApplication, now: datetime | None) -> datetime:
    """Timestamp for a new entry; never earlier than the last recorded change."""
    return max(_resolve_now(now), app.last_updated)


def _coerce_status(value: JobStatus | str) -> JobStatus:
    try:
        return JobStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status value: {value}", field="status")


def _coerce_note_type(value: NoteType | str) -> NoteType:
    try:
        return NoteType(value)
    except ValueError:
        raise ValidationError(f"Invalid note type: {value}", field="type")


def _interview_activity(interview_date: datetime, at: datetime) -> Activity:
    day = interview_date.date().isoformat()
    return Activity(
        id=_new_id("act"),
        type=ActivityType.INTERVIEW_SCHEDULED,
        timestamp=at,
        description=f"Interview scheduled for {day}",
        metadata={"interview_date": interview_date.isoformat()},
    )


def create_application(
    data: ApplicationCreate,
    user_id: str,
    now: datetime | None = None,
) -> JobApplication:
    """Build a new application with seeded history and creation activity.

    Assumes ``data.application_date`` is not after ``now``; that is checked by
    the validation layer before this is called.
    """
    created_at = _resolve_now(now)
    activities = [
        Activity(
            id=_new_id("act"),
            type=ActivityType.APPLICATION_CREATED,
            timestamp=created_at,
            description="Application submitted",
        )
    ]
    if data.interview_date is not None:
        activities.append(_interview_activity(data.interview_date, created_at))

    return JobApplication(
        id=_new_id("app"),
        user_id=user_id,
        company=data.company,
        job_role=data.job_role,
        status=data.status,
        application_date=data.application_date,
        last_updated=created_at,
        notes=data.notes,
        salary=data.salary,
        job_url=data.job_url,
        interview_date=data.interview_date,
        status_history=[StatusHistoryEntry(status=data.status, changed_at=created_at)],
        notes_list=[],
        activities=activities,
    )


def apply_status_change(
    app: JobApplication,
    new_status: JobStatus | str,
    now: datetime | None = None,
) -> JobApplication:
    """Move ``app`` to ``new_status``.

    Any status may follow any other. Setting the current status again is a
    no-op and returns ``app`` itself.
    """
    target = _coerce_status(new_status)
    if target == app.status:
        logger.debug(f"Application {app.id} already in status {target.value}")
        return app

    changed_at = _effective_time(app, now)
    activity = Activity(
        id=_new_id("act"),
        type=ActivityType.STATUS_CHANGE,
        timestamp=changed_at,
        description=f"Status changed to {target.value}",
        metadata={"from": app.status.value, "to": target.value},
    )
    logger.info(
        f"Application {app.id} status {app.status.value} -> {target.value}"
    )
    return app.model_copy(
        update={
            "status": target,
            "last_updated": changed_at,
            "status_history": [
                *app.status_history,
                StatusHistoryEntry(status=target, changed_at=changed_at),
            ],
            "activities": [*app.activities, activity],
        }
    )


def add_note(
    app: JobApplication,
    content: str,
    note_type: NoteType | str = NoteType.GENERAL,
    now: datetime | None = None,
) -> JobApplication:
    """Append a note and its ``note_added`` activity."""
    kind = _coerce_note_type(note_type)
    cleaned = sanitize_text(content or "")
    if not cleaned:
        raise ValidationError("Note content is required", field="content")
    if len(cleaned) > settings.note_max_length:
        raise ValidationError(
            f"Note must be less than {settings.note_max_length} characters",
            field="content",
        )

    created_at = _effective_time(app, now)
    note = Note(id=_new_id("note"), content=cleaned, type=kind, created_at=created_at)
    activity = Activity(
        id=_new_id("act"),
        type=ActivityType.NOTE_ADDED,
        timestamp=created_at,
        description=f"{NOTE_TYPE_LABELS[kind]} added",
    )
    logger.info(f"Added {kind.value} note to application {app.id}")
    return app.model_copy(
        update={
            "last_updated": created_at,
            "notes_list": [*app.notes_list, note],
            "activities": [*app.activities, activity],
        }
    )


def schedule_interview(
    app: JobApplication,
    interview_date: datetime,
    now: datetime | None = None,
) -> JobApplication:
    """Set the interview date and log an ``interview_scheduled`` activity."""
    interview_date = ensure_aware(interview_date)
    if app.interview_date == interview_date:
        return app

    scheduled_at = _effective_time(app, now)
    logger.info(f"Interview for application {app.id} set to {interview_date}")
    return app.model_copy(
        update={
            "interview_date": interview_date,
            "last_updated": scheduled_at,
            "activities": [
                *app.activities,
                _interview_activity(interview_date, scheduled_at),
            ],
        }
    )


def update_details(
    app: JobApplication,
    changes: ApplicationUpdate,
    now: datetime | None = None,
) -> JobApplication:
    """Apply a partial edit.

    Status and interview date go through :func:`apply_status_change` and
    :func:`schedule_interview` so they are logged; other fields are replaced
    in place. ``last_updated`` is bumped only if something actually changed.
    """
    fields = changes.model_dump(exclude_unset=True)
    new_status = fields.pop("status", None)
    interview_given = "interview_date" in fields
    interview_date = fields.pop("interview_date", None)
    if "notes" in fields and fields["notes"] is None:
        fields["notes"] = ""
    for required in ("company", "job_role", "application_date"):
        if required in fields and fields[required] is None:
            del fields[required]

    edited = {
        name: value for name, value in fields.items() if getattr(app, name) != value
    }
    updated = app
    if edited:
        edited_at = _effective_time(app, now)
        if "application_date" in edited:
            edited_at = max(edited_at, edited["application_date"])
        updated = app.model_copy(update={**edited, "last_updated": edited_at})

    if interview_given:
        if interview_date is not None:
            updated = schedule_interview(updated, interview_date, now)
        elif updated.interview_date is not None:
            updated = updated.model_copy(
                update={
                    "interview_date": None,
                    "last_updated": _effective_time(updated, now),
                }
            )

    if new_status is not None:
        updated = apply_status_change(updated, new_status, now)

    return updated
