"""Custom exceptions for the tracker."""

from fastapi import HTTPException, status


class TrackerError(Exception):
    """Base exception for tracker errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(TrackerError):
    """Raised when user input is malformed or empty."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(TrackerError):
    """Raised when a referenced resource is absent from the owner's collection."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class StorageError(TrackerError):
    """Raised when a persistence round trip fails."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage {operation} failed: {detail}")


def not_found_exception(detail: str = "Resource not found") -> HTTPException:
    """Return a 404 Not Found exception."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def validation_exception(
    detail: str = "Invalid input", field: str | None = None
) -> HTTPException:
    """Return a 422 exception carrying the offending field."""
    return HTTPException(
        status_code=422,
        detail={"message": detail, "field": field},
    )


def storage_exception(detail: str = "Storage unavailable") -> HTTPException:
    """Return a 503 exception; the client may retry."""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=detail,
        headers={"Retry-After": "1"},
    )
