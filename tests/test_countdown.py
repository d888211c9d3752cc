from datetime import datetime, timedelta, timezone

import pytest

from tracker.collector import collect_events
from tracker.countdown import (
    effective_timestamp,
    format_countdown,
    get_countdown_parts,
    interviews_between,
    parse_timestamp,
    split_next,
    upcoming_interviews,
)
from tracker.models import CalendarEvent, CountdownParts

NOW = datetime(2025, 2, 25, 12, 0, 0)


def _interview(id, date="2025-02-25", **kwargs):
    return CalendarEvent(id=id, kind="interview", date=date, title="Globex", **kwargs)


def test_effective_timestamp_prefers_full_timestamp():
    ev = _interview("a", time="13:00", date_time="2025-02-25T13:00:30")

    assert effective_timestamp(ev) == "2025-02-25T13:00:30"
    assert effective_timestamp(_interview("b", time="13:00")) == "2025-02-25T13:00"
    assert effective_timestamp(_interview("c")) == "2025-02-25T00:00:00"
    assert effective_timestamp(_interview("d"), "23:59:59") == "2025-02-25T23:59:59"


def test_parse_timestamp():
    assert parse_timestamp("2025-02-25T13:00") == datetime(2025, 2, 25, 13, 0)
    assert parse_timestamp("2025-02-25T13:00:00Z") == datetime(2025, 2, 25, 13, 0, tzinfo=timezone.utc)
    assert parse_timestamp("tomorrow") is None


def test_countdown_one_hour_ahead():
    parts = get_countdown_parts(_interview("a", time="13:00"), NOW)

    assert parts == CountdownParts(days=0, hours=1, minutes=0, seconds=0, is_past=False)


def test_countdown_one_hour_ago_has_same_magnitude():
    parts = get_countdown_parts(_interview("a", time="11:00"), NOW)

    assert parts == CountdownParts(days=0, hours=1, minutes=0, seconds=0, is_past=True)


def test_countdown_decomposition():
    ev = _interview("a", date="2025-02-27", date_time="2025-02-27T15:04:05")

    parts = get_countdown_parts(ev, NOW)

    assert (parts.days, parts.hours, parts.minutes, parts.seconds) == (2, 3, 4, 5)
    assert not parts.is_past


def test_countdown_date_only_counts_to_midnight():
    parts = get_countdown_parts(_interview("a", date="2025-02-26"), NOW)

    assert (parts.days, parts.hours, parts.minutes) == (0, 12, 0)


def test_countdown_drops_sub_second_remainder():
    now = datetime(2025, 2, 25, 12, 59, 59, 500000)

    parts = get_countdown_parts(_interview("a", time="13:00"), now)

    assert (parts.minutes, parts.seconds) == (0, 0)
    assert not parts.is_past


def test_countdown_with_timezone_aware_values():
    ev = _interview("a", date_time="2025-02-25T13:00:00Z")
    now = datetime(2025, 2, 25, 12, 0, tzinfo=timezone.utc)

    assert get_countdown_parts(ev, now).hours == 1


def test_countdown_mixes_naive_event_with_aware_now():
    ev = _interview("a", time="13:00")
    now = NOW.astimezone()

    assert get_countdown_parts(ev, now).hours == 1


def test_countdown_without_now():
    assert get_countdown_parts(_interview("a"), None) is None


def test_countdown_with_unparseable_timestamp():
    assert get_countdown_parts(_interview("a", date_time="next tuesday"), NOW) is None


def test_upcoming_interviews_ordering():
    events = collect_events(
        {
            "interviews": [
                {"id": "nine", "company": "Globex", "date": "2025-03-01T09:00"},
                {"id": "eight", "company": "Globex", "date": "2025-03-01T08:00"},
                {"id": "past", "company": "Globex", "date": "2025-02-20T10:00"},
            ]
        }
    )

    upcoming = upcoming_interviews(events, datetime(2025, 2, 25))

    assert [ev.id for ev in upcoming] == ["interview-eight", "interview-nine"]


def test_interview_without_time_is_upcoming_all_day():
    events = [_interview("today")]

    assert upcoming_interviews(events, datetime(2025, 2, 25, 23, 0)) == events
    assert upcoming_interviews(events, datetime(2025, 2, 26, 0, 0, 1)) == []


def test_timeless_interview_sorts_after_timed_ones_that_day():
    timed = _interview("timed", time="17:00")
    timeless = _interview("timeless")

    upcoming = upcoming_interviews([timeless, timed], NOW)

    assert [ev.id for ev in upcoming] == ["timed", "timeless"]


def test_collected_timeless_interview_stays_upcoming_and_sorts_last():
    events = collect_events(
        {
            "interviews": [
                {"id": "timeless", "company": "Globex", "date": "2025-02-26"},
                {"id": "timed", "company": "Globex", "date": "2025-02-26T17:00"},
            ]
        }
    )

    assert [ev.id for ev in upcoming_interviews(events, datetime(2025, 2, 26, 18, 0))] == ["interview-timeless"]
    assert [ev.id for ev in upcoming_interviews(events, NOW)] == ["interview-timed", "interview-timeless"]


def test_upcoming_interviews_limit_and_kind_filter():
    events = [_interview(f"i{day}", date=f"2025-03-{day:02d}") for day in range(10, 1, -1)]
    events.append(CalendarEvent(id="offer", kind="offer", date="2025-03-01", title="Hooli"))

    upcoming = upcoming_interviews(events, NOW)

    assert [ev.id for ev in upcoming] == ["i2", "i3", "i4", "i5", "i6"]
    assert len(upcoming_interviews(events, NOW, limit=2)) == 2


def test_upcoming_interviews_skip_unparseable():
    events = [_interview("bad", date_time="soon"), _interview("ok", date="2025-03-01")]

    assert [ev.id for ev in upcoming_interviews(events, NOW)] == ["ok"]


def test_upcoming_interviews_without_now():
    assert upcoming_interviews([_interview("a", date="2025-03-01")], None) == []


def test_split_next():
    a, b, c = _interview("a"), _interview("b"), _interview("c")

    assert split_next([a, b, c]) == (a, [b, c])
    assert split_next([a]) == (a, [])
    assert split_next([]) == (None, [])


@pytest.mark.parametrize(
    "parts, expected",
    [
        (CountdownParts(days=2, hours=3, minutes=4, seconds=5, is_past=False), "in 2d 03:04:05"),
        (CountdownParts(days=0, hours=0, minutes=0, seconds=9, is_past=False), "in 00:00:09"),
        (CountdownParts(days=5, hours=0, minutes=0, seconds=1, is_past=True), "5d 00:00:01 ago"),
    ],
)
def test_format_countdown(parts, expected):
    assert format_countdown(parts) == expected


def test_upcoming_interviews_until():
    events = [_interview("soon", date="2025-03-01", time="09:00"), _interview("late", date="2025-04-01")]

    upcoming = upcoming_interviews(events, NOW, until=datetime(2025, 3, 27, 12, 0))

    assert [ev.id for ev in upcoming] == ["soon"]


def test_interviews_between_is_half_open():
    events = [
        _interview("start", date="2025-02-26", time="12:00"),
        _interview("inside", date="2025-02-26", time="12:30"),
        _interview("end", date="2025-02-26", time="13:00"),
        CalendarEvent(id="offer", kind="offer", date="2025-02-26", title="Hooli", time="12:15"),
    ]

    selected = interviews_between(events, datetime(2025, 2, 26, 12, 0), datetime(2025, 2, 26, 13, 0))

    assert [ev.id for ev in selected] == ["start", "inside"]


def test_interviews_between_with_utc_timestamps():
    ev = _interview("utc", time="12:30", date_time="2025-02-26T12:30:00Z")
    start = datetime(2025, 2, 26, 12, 0, tzinfo=timezone.utc)

    assert interviews_between([ev], start, start + timedelta(hours=1)) == [ev]
