"""Data models for the activity calendar."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

ActivityKind = Literal["applied", "interview", "rejected", "withdrawn", "offer"]

ACTIVITY_KINDS: tuple[str, ...] = ("applied", "interview", "rejected", "withdrawn", "offer")

KIND_LABELS = {
    "applied": "Applied",
    "interview": "Interview",
    "rejected": "Rejected",
    "withdrawn": "Withdrawn",
    "offer": "Offer",
}


class CalendarEvent(BaseModel):
    """One application-lifecycle occurrence shown on the calendar."""

    id: str
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    kind: ActivityKind
    title: str
    subtitle: Optional[str] = None
    time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    date_time: Optional[str] = None  # original timestamp, used for countdowns
    location: Optional[str] = None
    employment_type: Optional[str] = None

    def to_row(self) -> list[str]:
        """Convert to spreadsheet row format."""
        return [
            self.date,
            KIND_LABELS[self.kind],
            self.title,
            self.subtitle or "",
            self.time or "",
            self.location or "",
            self.employment_type or "",
        ]


class GridDay(BaseModel):
    """One cell of the 6x7 month grid."""

    date: date
    iso: str
    in_current_month: bool


def empty_kind_counts() -> dict[str, int]:
    return {kind: 0 for kind in ACTIVITY_KINDS}


class MonthStats(BaseModel):
    total: int = 0
    by_kind: dict[str, int] = Field(default_factory=empty_kind_counts)
    outcomes: int = 0


class CountdownParts(BaseModel):
    days: int = Field(ge=0)
    hours: int = Field(ge=0, lt=24)
    minutes: int = Field(ge=0, lt=60)
    seconds: int = Field(ge=0, lt=60)
    is_past: bool


class StatsReport(BaseModel):
    """Everything the month statistics panel needs."""

    year: int
    month: int  # 0-based
    current: MonthStats
    previous: MonthStats
    all_time: MonthStats
    positive: int
    negative: int
    positive_pct: int
    negative_pct: int
    positive_prev_pct: int
    negative_prev_pct: int
    total_per_week: float
    total_per_week_prev: float
    applied_per_week: float
    applied_per_week_prev: float
    total_growth_pct: Optional[int] = None
    applied_growth_pct: Optional[int] = None
    rest_of_all_time_total: int = 0
    rest_of_all_time_applied: int = 0
