"""Pydantic schemas for request/response validation."""

from jobtracker.schemas.analytics import AnalyticsStats, MonthlyTrend
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
)
from jobtracker.schemas.query import ApplicationPage, FilterCriteria, SortBy

__all__ = [
    "Activity",
    "ActivityType",
    "AnalyticsStats",
    "ApplicationCreate",
    "ApplicationPage",
    "ApplicationUpdate",
    "FilterCriteria",
    "JobApplication",
    "JobStatus",
    "MonthlyTrend",
    "Note",
    "NoteType",
    "SortBy",
    "StatusHistoryEntry",
]
