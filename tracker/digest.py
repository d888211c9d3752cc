"""Monthly digest: last month's activity plus what is coming up."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from .calendar_grid import MONTH_NAMES, prev_month
from .countdown import UPCOMING_LIMIT, upcoming_interviews
from .models import CalendarEvent, MonthStats
from .normalize import format_human_date_time
from .stats import get_month_stats

DIGEST_HORIZON = timedelta(days=30)


class MonthlyDigest(BaseModel):
    year: int
    month: int  # 0-based
    month_label: str
    stats: MonthStats
    upcoming: list[CalendarEvent]
    message: str


def motivational_message(total: int) -> str:
    if total == 0:
        return (
            "No activity last month, but every journey starts with a single step. "
            "Let's make this month count!"
        )
    if total < 5:
        return "You're making progress! Keep the momentum going."
    if total < 15:
        return "Great work last month! Your consistency is paying off."
    return "Incredible effort! You're really crushing your job search."


def build_digest(events: list[CalendarEvent], now: datetime, limit: int = UPCOMING_LIMIT) -> MonthlyDigest:
    """Summarize the calendar month before ``now``.

    Only interviews within the next 30 days are listed.
    """
    year, month = prev_month(now.year, now.month - 1)
    stats = get_month_stats(events, year, month)

    return MonthlyDigest(
        year=year,
        month=month,
        month_label=f"{MONTH_NAMES[month]} {year}",
        stats=stats,
        upcoming=upcoming_interviews(events, now, limit, until=now + DIGEST_HORIZON),
        message=motivational_message(stats.total),
    )


def render_digest(digest: MonthlyDigest, user_name: Optional[str] = None) -> str:
    """Render the digest as a plain-text email body."""
    greeting = f"Hi {user_name}," if user_name else "Hi there,"
    by_kind = digest.stats.by_kind

    lines = [
        greeting,
        "",
        f"Here's a summary of your job search activity in {digest.month_label}.",
        "",
        f"  Applied:    {by_kind['applied']}",
        f"  Interviews: {by_kind['interview']}",
        f"  Offers:     {by_kind['offer']}",
        f"  Rejected:   {by_kind['rejected']}",
        f"  Withdrawn:  {by_kind['withdrawn']}",
        "",
    ]

    if digest.upcoming:
        lines.append("Upcoming interviews:")
        for event in digest.upcoming:
            role = f" ({event.subtitle})" if event.subtitle else ""
            lines.append(f"  - {event.title}{role}: {format_human_date_time(event.date, event.time)}")
        lines.append("")

    lines.append(digest.message)
    return "\n".join(lines)


def digest_subject(digest: MonthlyDigest) -> str:
    return f"Your monthly digest: {digest.month_label}"
