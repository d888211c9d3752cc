"""Interview reminder emails.

A reminder run is expected once an hour: each run picks the interviews
starting in the one-hour window that opens ``hours_before`` hours from
now, so every interview is reminded about once.
"""

import logging
from datetime import datetime, timedelta

from .countdown import get_countdown_parts, interviews_between
from .models import CalendarEvent
from .normalize import format_human_date_time

logger = logging.getLogger(__name__)

DEFAULT_HOURS_BEFORE = 24
REMINDER_WINDOW = timedelta(hours=1)


def due_reminders(
    events: list[CalendarEvent], now: datetime, hours_before: int = DEFAULT_HOURS_BEFORE
) -> list[CalendarEvent]:
    """Interviews starting in [now + hours_before, now + hours_before + 1h)."""
    start = now + timedelta(hours=hours_before)
    due = interviews_between(events, start, start + REMINDER_WINDOW)
    logger.debug(f"{len(due)} interviews due for a reminder between {start} and {start + REMINDER_WINDOW}")
    return due


def reminder_subject(event: CalendarEvent) -> str:
    if event.subtitle:
        return f"Interview Reminder: {event.title} - {event.subtitle}"
    return f"Interview Reminder: {event.title}"


def render_reminder(event: CalendarEvent, now: datetime, user_name=None) -> str:
    lines = [
        f"Hi {user_name}," if user_name else "Hi there,",
        "",
        "You have an upcoming interview!",
        "",
        f"  Company:  {event.title}",
    ]
    if event.subtitle:
        lines.append(f"  Role:     {event.subtitle}")
    lines.append(f"  When:     {format_human_date_time(event.date, event.time)}")
    if event.location:
        lines.append(f"  Location: {event.location}")

    parts = get_countdown_parts(event, now)
    if parts is not None and not parts.is_past:
        lines.append(f"  Starts:   in {parts.days}d {parts.hours}h {parts.minutes}m")

    lines.extend(["", "Good luck!"])
    return "\n".join(lines)
