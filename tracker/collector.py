"""Collect calendar events from the tracker's record collections.

Each collection stores the same lifecycle dates under different field
names, so every collection has its own rule set. A rule names the event
kind it produces, the candidate fields tried in order (first one that
normalizes wins), the id prefix, and whether the event carries a time.
"""

import logging
from typing import Any, Iterable, Mapping, NamedTuple, Optional

from .models import KIND_LABELS, CalendarEvent
from .normalize import extract_time, normalize_date

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "job-tracker:"


class EventRule(NamedTuple):
    kind: str
    fields: tuple[str, ...]
    id_prefix: str
    with_time: bool = False


APPLIED_ONLY_FIELDS = ("appliedOn", "appliedDate", "date", "createdAt")

# Scan order matters: on duplicates the earliest-scanned source wins.
COLLECTION_RULES: list[tuple[str, tuple[EventRule, ...]]] = [
    ("interviews", (EventRule("interview", ("date",), "interview", with_time=True),)),
    (
        "rejected",
        (
            EventRule("applied", ("appliedDate",), "applied-from-rejected"),
            EventRule("rejected", ("decisionDate",), "rejected"),
        ),
    ),
    (
        "withdrawn",
        (
            EventRule("applied", ("appliedOn", "appliedDate"), "applied-from-withdrawn"),
            EventRule("interview", ("interviewDate",), "interview-from-withdrawn", with_time=True),
            EventRule("withdrawn", ("withdrawnDate",), "withdrawn"),
        ),
    ),
    ("applied", (EventRule("applied", APPLIED_ONLY_FIELDS, "applied-job-tracker:applied"),)),
    ("applications", (EventRule("applied", APPLIED_ONLY_FIELDS, "applied-job-tracker:applications"),)),
    ("offers", (EventRule("offer", ("offerDate", "acceptedDate", "createdAt"), "offer"),)),
]

COLLECTION_NAMES = tuple(name for name, _ in COLLECTION_RULES)


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _as_list(payload: Any) -> list:
    return payload if isinstance(payload, list) else []


def get_collection(collections: Mapping[str, Any], name: str) -> list:
    """Look up a collection by bare or storage-prefixed name."""
    if name in collections:
        return _as_list(collections[name])
    return _as_list(collections.get(STORAGE_PREFIX + name))


def _resolve(item: Mapping[str, Any], fields: Iterable[str]) -> tuple[Optional[str], Any]:
    """Return (normalized date, raw value) for the first field that normalizes."""
    for field in fields:
        raw = item.get(field)
        normalized = normalize_date(raw)
        if normalized:
            return normalized, raw
    return None, None


def event_from_rule(item: Mapping[str, Any], rule: EventRule) -> Optional[CalendarEvent]:
    """Build the event a rule describes, or None if no candidate date resolves."""
    date, raw = _resolve(item, rule.fields)
    if not date:
        return None

    time = None
    date_time = None
    if rule.with_time:
        time = extract_time(raw)
        # date-only values keep date_time unset so the day-end fallback applies
        if time is not None:
            date_time = raw

    source_id = item.get("id")
    if source_id is None:
        # Timed events fall back to the raw timestamp so two interviews on
        # the same day keep distinct ids.
        source_id = raw if rule.with_time else date

    return CalendarEvent(
        id=f"{rule.id_prefix}-{source_id}",
        date=date,
        kind=rule.kind,
        title=_text(item.get("company")) or KIND_LABELS[rule.kind],
        subtitle=_text(item.get("role")),
        time=time,
        date_time=date_time,
        location=_text(item.get("location")),
        employment_type=_text(item.get("employmentType")),
    )


def collect_events(collections: Mapping[str, Any]) -> list[CalendarEvent]:
    """Turn the raw record collections into calendar events, in scan order.

    Records without a resolvable date contribute nothing; missing or
    non-list collections count as empty.
    """
    events: list[CalendarEvent] = []
    skipped = 0

    for name, rules in COLLECTION_RULES:
        for item in get_collection(collections, name):
            if not isinstance(item, Mapping):
                skipped += 1
                continue
            produced = 0
            for rule in rules:
                event = event_from_rule(item, rule)
                if event is not None:
                    events.append(event)
                    produced += 1
            if not produced:
                skipped += 1

    logger.debug(f"Collected {len(events)} events ({skipped} records without a usable date)")
    return events
