"""Search, filtering, sorting and pagination of application lists."""

import math
import re
from collections.abc import Callable, Sequence
from datetime import UTC

from jobtracker.core.config import settings
from jobtracker.core.exceptions import ValidationError
from jobtracker.schemas.application import JobApplication
from jobtracker.schemas.query import ApplicationPage, FilterCriteria, SortBy
from jobtracker.utils.sanitize import sanitize_search_input
from jobtracker.utils.validators import validate_page

_NON_DIGITS = re.compile(r"\D")

_SORT_KEYS: dict[str, tuple[Callable[[JobApplication], object], bool]] = {
    "date-desc": (lambda app: app.application_date, True),
    "date-asc": (lambda app: app.application_date, False),
    "updated-desc": (lambda app: app.last_updated, True),
    "updated-asc": (lambda app: app.last_updated, False),
}


def parse_salary(salary: str | None) -> int | None:
    """Read a free-text salary as an integer by dropping every non-digit.

    Lossy: "$150k-$200k" becomes 150200. Returns None when no digits remain.
    """
    if not salary:
        return None
    digits = _NON_DIGITS.sub("", salary)
    return int(digits) if digits else None


def matches_query(app: JobApplication, query: str) -> bool:
    """Case-insensitive substring match on company, role, notes and salary."""
    term = query.strip().lower()
    if not term:
        return True
    haystacks = (app.company, app.job_role, app.notes or "", app.salary or "")
    return any(term in text.lower() for text in haystacks)


def matches_filters(app: JobApplication, filters: FilterCriteria) -> bool:
    """Check ``app`` against every filter that is set."""
    if filters.status is not None and app.status != filters.status:
        return False
    if filters.company and filters.company.lower() not in app.company.lower():
        return False
    if filters.job_role and filters.job_role.lower() not in app.job_role.lower():
        return False
    applied_on = app.application_date.astimezone(UTC).date()
    if filters.start_date is not None and applied_on < filters.start_date:
        return False
    if filters.end_date is not None and applied_on > filters.end_date:
        return False
    if filters.has_interview is not None:
        if (app.interview_date is not None) != filters.has_interview:
            return False
    if filters.has_notes is not None:
        if bool(app.notes_list) != filters.has_notes:
            return False

    if filters.min_salary is not None or filters.max_salary is not None:
        salary = parse_salary(app.salary)
        if salary is None:
            return False
        if filters.min_salary is not None and salary < filters.min_salary:
            return False
        if filters.max_salary is not None and salary > filters.max_salary:
            return False

    return True


def sort_applications(
    applications: Sequence[JobApplication], sort: SortBy = "date-desc"
) -> list[JobApplication]:
    """Return a new list in ``sort`` order; equal keys keep their input order."""
    if sort not in _SORT_KEYS:
        raise ValidationError(f"Unknown sort order: {sort}", field="sort")
    key, descending = _SORT_KEYS[sort]
    return sorted(applications, key=key, reverse=descending)


def filter_and_sort(
    applications: Sequence[JobApplication],
    query: str = "",
    filters: FilterCriteria | None = None,
    sort: SortBy = "date-desc",
    page: int = 1,
    page_size: int | None = None,
) -> ApplicationPage:
    """Produce one page of matching applications without touching the input."""
    validation = validate_page(page)
    if not validation.is_valid:
        raise ValidationError(validation.error, field=validation.field)

    size = page_size or settings.page_size
    term = sanitize_search_input(query or "")
    criteria = filters or FilterCriteria()

    matched = [
        app
        for app in applications
        if matches_query(app, term) and matches_filters(app, criteria)
    ]
    ordered = sort_applications(matched, sort)

    start = (page - 1) * size
    return ApplicationPage(
        items=ordered[start : start + size],
        total=len(ordered),
        page=page,
        page_size=size,
        total_pages=math.ceil(len(ordered) / size),
    )
