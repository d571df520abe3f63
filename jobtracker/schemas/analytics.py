"""Schemas for aggregate application analytics."""

from pydantic import BaseModel, Field


class MonthlyTrend(BaseModel):
    """Applications submitted in one calendar month."""

    month: str = Field(..., description="Abbreviated month and 2-digit year, e.g. 'Jan 25'")
    count: int = 0


class AnalyticsStats(BaseModel):
    """Summary statistics over a user's applications. Derived, never stored."""

    total_applications: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    monthly_trends: list[MonthlyTrend] = Field(default_factory=list)
    this_month: int = 0
    success_rate: int = Field(default=0, ge=0, le=100)
    avg_days_to_interview: int = 0
