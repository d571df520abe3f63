"""Schemas for searching, filtering and paging application lists."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from jobtracker.schemas.application import JobApplication, JobStatus

SortBy = Literal["date-desc", "date-asc", "updated-desc", "updated-asc"]


class FilterCriteria(BaseModel):
    """Structured filters; every field that is set must match."""

    status: JobStatus | None = None
    company: str | None = Field(default=None, max_length=100)
    job_role: str | None = Field(default=None, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    has_interview: bool | None = None
    has_notes: bool | None = None
    min_salary: int | None = Field(default=None, gt=0)
    max_salary: int | None = Field(default=None, gt=0)


class ApplicationPage(BaseModel):
    """One page of a filtered, sorted application list."""

    items: list[JobApplication] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0
