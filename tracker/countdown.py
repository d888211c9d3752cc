"""Countdowns to calendar events and upcoming interview selection.

Nothing here reads the clock: "now" is always passed in, and None means
the caller's clock has not started yet.
"""

import logging
from datetime import datetime
from typing import Optional

from .models import CalendarEvent, CountdownParts

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5


def effective_timestamp(event: CalendarEvent, fallback_time: str = "00:00:00") -> str:
    """Best available ISO timestamp for an event."""
    if event.date_time is not None:
        return event.date_time
    if event.time:
        return f"{event.date}T{event.time}"
    return f"{event.date}T{fallback_time}"


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; None if it cannot be parsed."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _align(target: datetime, now: datetime) -> tuple[datetime, datetime]:
    """Make both datetimes comparable, reading naive values as local time."""
    target_aware = target.tzinfo is not None
    now_aware = now.tzinfo is not None
    if target_aware and not now_aware:
        now = now.astimezone()
    elif now_aware and not target_aware:
        target = target.astimezone()
    return target, now


def _resolve(event: CalendarEvent, now: datetime, fallback_time: str) -> Optional[tuple[datetime, datetime]]:
    target = parse_timestamp(effective_timestamp(event, fallback_time))
    if target is None:
        return None
    return _align(target, now)


def get_countdown_parts(event: CalendarEvent, now: Optional[datetime]) -> Optional[CountdownParts]:
    """Break the distance between now and the event into d/h/m/s.

    The parts are always non-negative; is_past tells the direction.
    Returns None when now is unknown or the event time does not parse.
    """
    if now is None:
        return None

    resolved = _resolve(event, now, "00:00:00")
    if resolved is None:
        logger.debug(f"Unparseable timestamp for event {event.id}")
        return None
    target, now = resolved

    diff = target - now
    total_seconds = int(abs(diff.total_seconds()))
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    return CountdownParts(
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        is_past=diff.total_seconds() < 0,
    )


def _interview_targets(events: list[CalendarEvent], reference: datetime, fallback_time: str):
    for event in events:
        if event.kind != "interview":
            continue
        resolved = _resolve(event, reference, fallback_time)
        if resolved is not None:
            yield event, resolved[0], resolved[1]


def upcoming_interviews(
    events: list[CalendarEvent],
    now: Optional[datetime],
    limit: int = UPCOMING_LIMIT,
    until: Optional[datetime] = None,
) -> list[CalendarEvent]:
    """Interviews at or after now, soonest first.

    An interview without a known time counts as upcoming until the end of
    its day. With ``until``, interviews after that moment are left out.
    """
    if now is None:
        return []

    upcoming = []
    for event, target, current in _interview_targets(events, now, "23:59:59"):
        if target < current:
            continue
        if until is not None:
            target, limit_at = _align(target, until)
            if target > limit_at:
                continue
        upcoming.append(event)

    upcoming.sort(key=lambda ev: effective_timestamp(ev, "23:59:59"))
    return upcoming[:limit]


def interviews_between(
    events: list[CalendarEvent], start: datetime, end: datetime, fallback_time: str = "00:00:00"
) -> list[CalendarEvent]:
    """Interviews with start <= timestamp < end, soonest first."""
    selected = []
    for event, target, lower in _interview_targets(events, start, fallback_time):
        target, upper = _align(target, end)
        target, lower = _align(target, lower)
        if lower <= target < upper:
            selected.append(event)

    selected.sort(key=lambda ev: effective_timestamp(ev, fallback_time))
    return selected


def split_next(upcoming: list[CalendarEvent]) -> tuple[Optional[CalendarEvent], list[CalendarEvent]]:
    """Split into the next event and the ones after it."""
    if not upcoming:
        return None, []
    return upcoming[0], upcoming[1:]


def format_countdown(parts: CountdownParts) -> str:
    clock = f"{parts.hours:02d}:{parts.minutes:02d}:{parts.seconds:02d}"
    if parts.days:
        clock = f"{parts.days}d {clock}"
    if parts.is_past:
        return f"{clock} ago"
    return f"in {clock}"
