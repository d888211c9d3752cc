"""Deduplication of calendar events derived from several collections."""

import logging
from typing import Any, Mapping

from .collector import collect_events
from .models import CalendarEvent

logger = logging.getLogger(__name__)

DedupeKey = tuple[str, str, str, str, str]


def dedupe_key(event: CalendarEvent) -> DedupeKey:
    """Identity of an event for display purposes.

    Location and employment type are not part of the key.
    """
    return (
        event.kind,
        event.date,
        event.title,
        event.subtitle or "",
        event.time or "",
    )


def dedupe_events(events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Drop repeated events, keeping the first occurrence of each key."""
    seen: set[DedupeKey] = set()
    unique: list[CalendarEvent] = []

    for event in events:
        key = dedupe_key(event)
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)

    removed = len(events) - len(unique)
    if removed:
        logger.debug(f"Deduplication: {len(events)} -> {len(unique)} ({removed} duplicates removed)")
    return unique


def build_events(collections: Mapping[str, Any]) -> list[CalendarEvent]:
    """Collect and deduplicate events from the raw collections."""
    return dedupe_events(collect_events(collections))


def events_by_date(events: list[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    """Group events by date, each day's list ordered by kind."""
    grouped: dict[str, list[CalendarEvent]] = {}
    for event in events:
        grouped.setdefault(event.date, []).append(event)

    for day_events in grouped.values():
        day_events.sort(key=lambda ev: ev.kind)
    return grouped
