"""Core application components."""

from jobtracker.core.config import settings
from jobtracker.core.exceptions import (
    NotFoundError,
    StorageError,
    TrackerError,
    ValidationError,
)
from jobtracker.core.storage import (
    ApplicationRepository,
    Base,
    InMemoryApplicationRepository,
    SQLApplicationRepository,
    async_session,
)

__all__ = [
    "ApplicationRepository",
    "Base",
    "InMemoryApplicationRepository",
    "NotFoundError",
    "SQLApplicationRepository",
    "StorageError",
    "TrackerError",
    "ValidationError",
    "async_session",
    "settings",
]
