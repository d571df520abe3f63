"""Aggregate statistics over a user's applications."""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from jobtracker.schemas.analytics import AnalyticsStats, MonthlyTrend
from jobtracker.schemas.application import JobApplication, JobStatus

TREND_MONTHS = 6

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Return the (year, month) that is ``offset`` calendar months away."""
    years, month_index = divmod(year * 12 + (month - 1) + offset, 12)
    return years, month_index + 1


def month_label(year: int, month: int) -> str:
    """Format a month like ``'Jan 25'``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def _in_month(moment: datetime, year: int, month: int) -> bool:
    return moment.year == year and moment.month == month


def count_by_status(applications: Iterable[JobApplication]) -> dict[str, int]:
    """Count applications per status; every status key is present."""
    counts = {status.value: 0 for status in JobStatus}
    for app in applications:
        counts[app.status.value] += 1
    return counts


def monthly_trends(
    applications: list[JobApplication], now: datetime
) -> list[MonthlyTrend]:
    """Applications per calendar month for the trailing six months, oldest first."""
    trends = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -offset)
        count = sum(
            1 for app in applications if _in_month(app.application_date, year, month)
        )
        trends.append(MonthlyTrend(month=month_label(year, month), count=count))
    return trends


def average_days_to_interview(applications: Iterable[JobApplication]) -> int:
    """Mean whole days from application to interview, over apps with an interview.

    Interviews dated before the application contribute negative days.
    """
    day_counts = [
        (app.interview_date - app.application_date) // timedelta(days=1)
        for app in applications
        if app.interview_date is not None
    ]
    if not day_counts:
        return 0
    return round_half_up(sum(day_counts) / len(day_counts))


def compute_analytics(
    applications: Iterable[JobApplication], now: datetime
) -> AnalyticsStats:
    """Summarise ``applications`` as of ``now``.

    Pure: no I/O, and the same inputs always give the same result.
    """
    apps = list(applications)
    total = len(apps)
    by_status = count_by_status(apps)

    success_rate = 0
    if total > 0:
        success_rate = round_half_up(by_status[JobStatus.OFFER.value] / total * 100)

    return AnalyticsStats(
        total_applications=total,
        by_status=by_status,
        monthly_trends=monthly_trends(apps, now),
        this_month=sum(
            1 for app in apps if _in_month(app.application_date, now.year, now.month)
        ),
        success_rate=success_rate,
        avg_days_to_interview=average_days_to_interview(apps),
    )
