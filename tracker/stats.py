"""Month and all-time statistics over calendar events.

Months are 0-based throughout. Ratio helpers return 0 (or None for
growth) instead of raising when there is nothing to divide by.
"""

import math
from typing import Iterable, Optional

from .calendar_grid import days_in_month, prev_month
from .models import CalendarEvent, MonthStats, StatsReport, empty_kind_counts


def _round_half_up(value: float) -> int:
    # ties go towards +infinity, not to the even neighbour
    return math.floor(value + 0.5)


def _tally(events: Iterable[CalendarEvent]) -> MonthStats:
    by_kind = empty_kind_counts()
    total = 0
    for event in events:
        by_kind[event.kind] += 1
        total += 1

    outcomes = by_kind["rejected"] + by_kind["withdrawn"] + by_kind["offer"]
    return MonthStats(total=total, by_kind=by_kind, outcomes=outcomes)


def get_month_stats(events: list[CalendarEvent], year: int, month: int) -> MonthStats:
    """Count events whose date falls in the given month."""
    prefix = f"{year:04d}-{month + 1:02d}-"
    return _tally(ev for ev in events if ev.date.startswith(prefix))


def get_all_time_stats(events: list[CalendarEvent]) -> MonthStats:
    return _tally(events)


def percentage(part: int, total: int) -> int:
    if not total:
        return 0
    return _round_half_up(part / total * 100)


def avg_per_week(total: int, year: int, month: int) -> float:
    """Average events per week over the length of the month."""
    weeks = days_in_month(year, month) / 7
    if not weeks:
        return 0.0
    return total / weeks


def growth_percent(current: int, prev: int) -> Optional[int]:
    """Month-over-month growth in percent; None when there is no baseline."""
    if prev == 0:
        return None
    return _round_half_up((current - prev) / prev * 100)


def _positive(stats: MonthStats) -> int:
    return stats.by_kind["interview"] + stats.by_kind["offer"]


def _negative(stats: MonthStats) -> int:
    return stats.by_kind["rejected"] + stats.by_kind["withdrawn"]


def build_stats_report(events: list[CalendarEvent], year: int, month: int) -> StatsReport:
    """Compare a month against the previous one and against all time."""
    prev_year, prev_mon = prev_month(year, month)

    current = get_month_stats(events, year, month)
    previous = get_month_stats(events, prev_year, prev_mon)
    all_time = get_all_time_stats(events)

    positive = _positive(current)
    negative = _negative(current)
    positive_prev = _positive(previous)
    negative_prev = _negative(previous)

    return StatsReport(
        year=year,
        month=month,
        current=current,
        previous=previous,
        all_time=all_time,
        positive=positive,
        negative=negative,
        positive_pct=percentage(positive, positive + negative),
        negative_pct=percentage(negative, positive + negative),
        positive_prev_pct=percentage(positive_prev, positive_prev + negative_prev),
        negative_prev_pct=percentage(negative_prev, positive_prev + negative_prev),
        total_per_week=avg_per_week(current.total, year, month),
        total_per_week_prev=avg_per_week(previous.total, prev_year, prev_mon),
        applied_per_week=avg_per_week(current.by_kind["applied"], year, month),
        applied_per_week_prev=avg_per_week(previous.by_kind["applied"], prev_year, prev_mon),
        total_growth_pct=growth_percent(current.total, previous.total),
        applied_growth_pct=growth_percent(current.by_kind["applied"], previous.by_kind["applied"]),
        rest_of_all_time_total=max(all_time.total - current.total, 0),
        rest_of_all_time_applied=max(all_time.by_kind["applied"] - current.by_kind["applied"], 0),
    )
