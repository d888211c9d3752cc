"""Month grid construction. Months are 0-based (0 = January)."""

import calendar
from datetime import date, timedelta

from .models import GridDay
from .normalize import to_iso_date

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

GRID_CELLS = 42  # 6 weeks * 7 days


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def prev_month(year: int, month: int) -> tuple[int, int]:
    if month == 0:
        return year - 1, 11
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 11:
        return year + 1, 0
    return year, month + 1


def build_month_grid(year: int, month: int) -> list[GridDay]:
    """Build the Monday-first 6-week grid for a month.

    Cells before the 1st and after the last day belong to the neighbouring
    months and are flagged with in_current_month=False. Raises ValueError
    when the grid would run past date.max (December 9999).
    """
    first = date(year, month + 1, 1)
    # date.weekday() is already Monday=0
    start = first - timedelta(days=first.weekday())
    if date.max - start < timedelta(days=GRID_CELLS - 1):
        raise ValueError(f"month grid for {to_iso_date(first)[:7]} extends past {date.max}")

    grid = []
    for offset in range(GRID_CELLS):
        day = start + timedelta(days=offset)
        grid.append(
            GridDay(
                date=day,
                iso=to_iso_date(day),
                in_current_month=day.month == month + 1,
            )
        )
    return grid
