"""Input sanitization for user-entered text."""

import re
from urllib.parse import urlparse

from jobtracker.core.config import settings
from jobtracker.schemas.application import ApplicationCreate, ApplicationUpdate

# Control characters except tab, newline and carriage return
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_SEARCH_UNSAFE = re.compile(r'[<>:"/\\|?*]')


def sanitize_text(value: str) -> str:
    """Remove control characters and trim surrounding whitespace."""
    return _CONTROL_CHARS.sub("", value).strip()


def sanitize_url(value: str) -> str:
    """Return the URL if it is http(s), otherwise an empty string."""
    candidate = sanitize_text(value)
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ""
    return candidate


def sanitize_search_input(value: str) -> str:
    """Strip characters with special meaning and cap the query length."""
    cleaned = sanitize_text(_SEARCH_UNSAFE.sub("", value))
    return cleaned[: settings.search_max_length]


def sanitize_application(
    data: ApplicationCreate | ApplicationUpdate,
) -> ApplicationCreate | ApplicationUpdate:
    """Return a copy of a create/update payload with its text fields cleaned.

    Only fields that were explicitly provided are touched, so an update keeps
    its notion of "unset".
    """
    provided = data.model_fields_set
    changes: dict[str, str | None] = {}

    for name in ("company", "job_role", "notes", "salary"):
        value = getattr(data, name)
        if name in provided and value is not None:
            changes[name] = sanitize_text(value)

    if "job_url" in provided and data.job_url is not None:
        changes["job_url"] = sanitize_url(data.job_url) or None

    return data.model_copy(update=changes)
