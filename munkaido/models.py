"""Data models for work logs and their summaries."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from munkaido.duration import delta_to_minutes


@dataclass(frozen=True)
class DailyRecord:
    """One user's logged attendance for one calendar date."""

    date: date
    arrival_time: str
    departure_time: str
    work_hours: float
    unpaid_break_minutes: int = 0
    unpaid_break_applied: bool = True


@dataclass(frozen=True)
class Holiday:
    """A public holiday."""

    date: date
    name: str


@dataclass(frozen=True)
class DaySummary:
    """Derived accounting for a single business day."""

    date: date
    arrival: str
    departure: str
    unpaid_break: int
    worked_hours: int
    worked_minutes: int
    plus_minus_hours: int
    plus_minus_minutes: int
    is_holiday: bool = False
    holiday_name: str | None = None
    is_default: bool = False

    @property
    def plus_minus_total(self) -> int:
        """Signed over/under-time in minutes."""
        return delta_to_minutes(self.plus_minus_hours, self.plus_minus_minutes)

    @property
    def is_negative(self) -> bool:
        """True when the day is short of the baseline."""
        return self.plus_minus_total < 0


@dataclass
class MonthSummary:
    """Per-day summaries of a month plus the signed month total."""

    year: int
    month: int
    days: list[DaySummary] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        """Sum of the signed daily deltas."""
        return sum(day.plus_minus_total for day in self.days)

    @property
    def total_sign(self) -> str:
        return "-" if self.total_minutes < 0 else "+"

    @property
    def total_hours(self) -> int:
        return abs(self.total_minutes) // 60

    @property
    def total_minutes_part(self) -> int:
        return abs(self.total_minutes) % 60


@dataclass(frozen=True)
class MonthlyStats:
    """Statistics for one calendar month of logs."""

    key: str
    month: str
    total_hours: float
    average_hours: float
    work_days: int


@dataclass
class StatisticsSummary:
    """Per-month statistics and their rollup."""

    months: list[MonthlyStats]
    total_work_days: int
    total_hours: float
    overall_average: float


@dataclass(frozen=True)
class AuthSession:
    """An authenticated backend session."""

    user_id: str
    email: str
    access_token: str = ""
    refresh_token: str = ""
    full_name: str = ""


class ChangeKind(str, Enum):
    """Type of change seen on the work log table."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A change notification for one user's work log."""

    table: str
    kind: ChangeKind
    date: date
