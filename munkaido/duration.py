"""Time-of-day and duration arithmetic."""

import math
import re

from munkaido.errors import InvalidTimeError

BASELINE_MINUTES = 8 * 60
MINUTES_PER_DAY = 24 * 60

_TIME_REGEX = re.compile(r"^(\d{2}):(\d{2})$")


class Duration:
    """Represents a duration in minutes with convenient operators."""

    @classmethod
    def parse(cls, time_of_day: str) -> "Duration":
        """Parse a 24-hour time string like '07:30' into minutes since midnight."""
        match = _TIME_REGEX.match(time_of_day)
        if not match:
            msg = f"Invalid time of day: {time_of_day!r}"
            raise InvalidTimeError(msg)
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            msg = f"Time of day out of range: {time_of_day!r}"
            raise InvalidTimeError(msg)
        return cls(60 * hours + minutes)

    def __init__(self, minutes: int = 0) -> None:
        self.minutes: int = minutes

    def __repr__(self) -> str:
        sign = "-" if self.minutes < 0 else ""
        abs_minutes = abs(self.minutes)
        return f"{sign}{abs_minutes // 60:02}:{abs_minutes % 60:02}"

    __str__ = __repr__

    def clock(self) -> str:
        """Format as a wall-clock time, wrapping past midnight."""
        wrapped = self.minutes % MINUTES_PER_DAY
        return f"{wrapped // 60:02}:{wrapped % 60:02}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes == other.minutes

    def __hash__(self) -> int:
        return hash(self.minutes)

    def __add__(self, other: "Duration") -> "Duration":
        return Duration(self.minutes + other.minutes)

    def __sub__(self, other: "Duration") -> "Duration":
        return Duration(self.minutes - other.minutes)

    def __neg__(self) -> "Duration":
        return Duration(-self.minutes)

    def __lt__(self, other: "Duration") -> bool:
        return self.minutes < other.minutes

    def __le__(self, other: "Duration") -> bool:
        return self.minutes <= other.minutes

    def __abs__(self) -> "Duration":
        return Duration(abs(self.minutes))

    def __bool__(self) -> bool:
        return self.minutes > 0


def parse_time_to_minutes(time_of_day: str) -> int:
    """Convert 'HH:MM' to minutes since midnight."""
    return Duration.parse(time_of_day).minutes


def elapsed_minutes(arrival: str, departure: str, unpaid_break_minutes: int) -> int:
    """
    Worked minutes between arrival and departure, minus the unpaid break.

    A departure earlier than the arrival is not treated as an overnight shift;
    the result is simply negative.
    """
    worked = Duration.parse(departure) - Duration.parse(arrival) - Duration(unpaid_break_minutes)
    return worked.minutes


def signed_delta(elapsed: int, baseline: int = BASELINE_MINUTES) -> tuple[int, int]:
    """
    Split ``elapsed - baseline`` into an (hours, minutes) pair.

    The sign lives on the hours. When the deficit is under an hour the hours
    are zero and cannot carry it, so the minutes become negative instead:
    ``signed_delta(460) == (0, -20)`` while ``signed_delta(390) == (-1, 30)``.
    """
    diff = elapsed - baseline
    hours, minutes = divmod(abs(diff), 60)
    if diff < 0:
        if hours:
            hours = -hours
        else:
            minutes = -minutes
    return hours, minutes


def delta_to_minutes(hours: int, minutes: int) -> int:
    """Recombine an (hours, minutes) delta pair into signed minutes."""
    return hours * 60 + (-minutes if hours < 0 else minutes)


def derive_departure(
    arrival: str, duration_hours: float, unpaid_break_minutes: int, break_applied: bool
) -> str:
    """Departure time for a declared work duration, wrapped to a 24-hour clock."""
    total = parse_time_to_minutes(arrival) + duration_hours * 60
    if break_applied:
        total += unpaid_break_minutes
    return Duration(math.floor(total)).clock()


def format_delta(hours: int, minutes: int) -> str:
    """Format a per-day delta pair, e.g. '-0 óra 20 perc' or '2 óra 0 perc'."""
    sign = "-" if hours < 0 or minutes < 0 else ""
    return f"{sign}{abs(hours)} óra {abs(minutes)} perc"


def format_signed_total(total_minutes: int) -> str:
    """Format a signed minute total with an explicit sign, e.g. '+0 óra 20 perc'."""
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours} óra {minutes} perc"


def format_worked(hours: int, minutes: int) -> str:
    """Format worked time, e.g. '7 óra 40 perc'."""
    return f"{hours} óra {minutes} perc"
