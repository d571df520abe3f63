"""Validation logic for application payloads."""

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from datetime import datetime

from jobtracker.core.config import settings
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationUpdate,
    ensure_aware,
)
from jobtracker.utils.sanitize import sanitize_text, sanitize_url


@dataclass
class ValidationResult:
    """Result of validation process."""

    is_valid: bool
    error: str | None = None
    field: str | None = None
    warnings: list[str] = dataclass_field(default_factory=list)


def validate_application_data(
    data: ApplicationCreate | ApplicationUpdate,
    now: datetime,
) -> ValidationResult:
    """Validate a create or update payload against the current time."""
    provided = data.model_fields_set
    warnings = []

    for name, label in (("company", "Company name"), ("job_role", "Job role")):
        value = getattr(data, name)
        if name not in provided and isinstance(data, ApplicationUpdate):
            continue
        if value is None or len(sanitize_text(value)) < 2:
            return ValidationResult(
                is_valid=False,
                error=f"{label} must be at least 2 characters",
                field=name,
            )

    if data.application_date is not None and data.application_date > ensure_aware(now):
        return ValidationResult(
            is_valid=False,
            error="Application date cannot be in the future",
            field="application_date",
        )

    if data.notes and len(sanitize_text(data.notes)) > settings.notes_max_length:
        return ValidationResult(
            is_valid=False,
            error=f"Notes must be less than {settings.notes_max_length} characters",
            field="notes",
        )

    if data.job_url and not sanitize_url(data.job_url):
        return ValidationResult(
            is_valid=False,
            error="Please enter a valid URL",
            field="job_url",
        )

    if (
        data.interview_date is not None
        and data.application_date is not None
        and data.interview_date < data.application_date
    ):
        warnings.append("Interview date is before the application date")

    return ValidationResult(is_valid=True, warnings=warnings)


def validate_page(page: int) -> ValidationResult:
    """Validate a 1-indexed page number."""
    if page < 1:
        return ValidationResult(
            is_valid=False,
            error="Page numbers start at 1",
            field="page",
        )
    return ValidationResult(is_valid=True)
