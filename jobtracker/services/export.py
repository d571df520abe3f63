"""Plain-text and CSV exports of tracked applications."""

import csv
import io
from collections.abc import Sequence
from datetime import datetime

from jobtracker.schemas.application import JobApplication, JobStatus
from jobtracker.services.analytics import count_by_status, round_half_up

CSV_HEADERS = [
    "Company",
    "Job Role",
    "Status",
    "Applied Date",
    "Updated Date",
    "Interview Date",
    "Salary",
    "Job URL",
    "Notes",
]

REPORT_ACTIVITY_LIMIT = 10
SUMMARY_RECENT_LIMIT = 10

STATUS_BREAKDOWN_LABELS = {
    JobStatus.APPLIED: "Applied",
    JobStatus.INTERVIEW: "Interviews",
    JobStatus.OFFER: "Offers",
    JobStatus.REJECTED: "Rejected",
    JobStatus.ON_HOLD: "On Hold",
}


def format_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def export_csv(applications: Sequence[JobApplication]) -> str:
    """Render applications as CSV, one row each."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for app in applications:
        writer.writerow(
            [
                app.company,
                app.job_role,
                app.status.value,
                format_date(app.application_date),
                format_date(app.last_updated),
                format_date(app.interview_date),
                app.salary or "",
                app.job_url or "",
                app.notes or "",
            ]
        )
    return buffer.getvalue()


def application_report(app: JobApplication) -> str:
    """Build a text report for a single application."""
    lines = [
        "JOB APPLICATION REPORT",
        "=" * 38,
        "",
        f"Company: {app.company}",
        f"Job Role: {app.job_role}",
        f"Status: {app.status.value}",
        "",
        "DATES:",
        f"Applied: {format_date(app.application_date)}",
        f"Updated: {format_date(app.last_updated)}",
    ]
    if app.interview_date:
        lines.append(f"Interview: {format_date(app.interview_date)}")

    lines += ["", "COMPENSATION:"]
    if app.salary:
        lines.append(f"Salary: {app.salary}")
    lines += ["", "LINKS:"]
    if app.job_url:
        lines.append(f"Job Posting: {app.job_url}")
    lines += ["", "NOTES:", app.notes or "No notes", "", "STATUS HISTORY:"]

    if app.status_history:
        lines += [
            f"- {entry.status.value} ({format_date(entry.changed_at)})"
            for entry in app.status_history
        ]
    else:
        lines.append("No history")

    lines += ["", "ACTIVITY LOG:"]
    if app.activities:
        lines += [
            f"- {activity.description} ({format_date(activity.timestamp)})"
            for activity in app.activities[:REPORT_ACTIVITY_LIMIT]
        ]
    else:
        lines.append("No activities")

    return "\n".join(lines)


def summary_report(applications: Sequence[JobApplication], now: datetime) -> str:
    """Build a job-search summary across all applications."""
    total = len(applications)
    by_status = count_by_status(applications)
    offers = by_status[JobStatus.OFFER.value]
    success_rate = round_half_up(offers / total * 100) if total else 0

    lines = [
        "JOB SEARCH SUMMARY REPORT",
        "=" * 38,
        "",
        f"Generated: {now.strftime('%Y-%m-%d %H:%M')}",
        "",
        "OVERVIEW:",
        f"- Total Applications: {total}",
        f"- Success Rate: {success_rate}%",
        f"- Offers Received: {offers}",
        "",
        "STATUS BREAKDOWN:",
    ]
    lines += [
        f"- {label}: {by_status[status.value]}"
        for status, label in STATUS_BREAKDOWN_LABELS.items()
    ]
    lines += ["", "RECENT APPLICATIONS:"]

    recent = sorted(applications, key=lambda app: app.application_date, reverse=True)
    for app in recent[:SUMMARY_RECENT_LIMIT]:
        lines += [
            f"{app.company} - {app.job_role}",
            f"  Status: {app.status.value}",
            f"  Applied: {format_date(app.application_date)}",
            "",
        ]

    return "\n".join(lines).rstrip() + "\n"
