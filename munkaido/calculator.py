"""Monthly summary and statistics calculations."""

import math
from calendar import monthrange
from collections.abc import Iterable
from datetime import date

from munkaido.duration import elapsed_minutes, signed_delta
from munkaido.models import (
    DailyRecord,
    DaySummary,
    Holiday,
    MonthlyStats,
    MonthSummary,
    StatisticsSummary,
)

# Assumed attendance for a working day with nothing logged
DEFAULT_ARRIVAL = "07:00"
DEFAULT_DEPARTURE = "15:00"
DEFAULT_UNPAID_BREAK = 20

STATISTICS_WINDOW_MONTHS = 6
MONTH_ABBREVIATIONS = [
    "Jan",
    "Feb",
    "Már",
    "Ápr",
    "Máj",
    "Jún",
    "Júl",
    "Aug",
    "Szep",
    "Okt",
    "Nov",
    "Dec",
]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    _, days_in_month = monthrange(year, month)
    return date(year, month, 1), date(year, month, days_in_month)


def business_days(year: int, month: int) -> list[date]:
    """All Monday-Friday dates of a month, in order."""
    _, days_in_month = monthrange(year, month)
    days = []
    for day in range(1, days_in_month + 1):
        target_date = date(year, month, day)
        # 5 = Saturday, 6 = Sunday
        if target_date.weekday() in (5, 6):
            continue
        days.append(target_date)
    return days


def summarize_day(
    target_date: date,
    arrival: str,
    departure: str,
    unpaid_break: int,
    holiday_name: str | None = None,
    is_default: bool = False,
) -> DaySummary:
    """Compute worked time and the delta against the baseline for one day."""
    worked = elapsed_minutes(arrival, departure, unpaid_break)
    worked_hours, worked_minutes = divmod(abs(worked), 60)
    plus_minus_hours, plus_minus_minutes = signed_delta(worked)
    return DaySummary(
        date=target_date,
        arrival=arrival,
        departure=departure,
        unpaid_break=unpaid_break,
        worked_hours=worked_hours,
        worked_minutes=worked_minutes,
        plus_minus_hours=plus_minus_hours,
        plus_minus_minutes=plus_minus_minutes,
        is_holiday=holiday_name is not None,
        holiday_name=holiday_name,
        is_default=is_default,
    )


def build_month_summary(
    year: int,
    month: int,
    records: Iterable[DailyRecord],
    holidays: Iterable[Holiday],
) -> MonthSummary:
    """
    Build the per-day summary of a month.

    Rules:
    - Only Monday-Friday produce rows; weekend logs are ignored
    - A logged day is computed from its arrival, departure and unpaid break
    - A holiday without a log is left out
    - Any other working day without a log gets the default 07:00-15:00 day
      with a 20 minute unpaid break
    """
    holiday_by_date = {holiday.date: holiday.name for holiday in holidays}
    record_by_date = {record.date: record for record in records}

    summary = MonthSummary(year=year, month=month)
    for target_date in business_days(year, month):
        holiday_name = holiday_by_date.get(target_date)
        record = record_by_date.get(target_date)

        if record is not None:
            summary.days.append(
                summarize_day(
                    target_date,
                    record.arrival_time,
                    record.departure_time,
                    record.unpaid_break_minutes,
                    holiday_name=holiday_name,
                )
            )
        elif holiday_name is None:
            summary.days.append(
                summarize_day(
                    target_date,
                    DEFAULT_ARRIVAL,
                    DEFAULT_DEPARTURE,
                    DEFAULT_UNPAID_BREAK,
                    is_default=True,
                )
            )

    return summary


def round_one_decimal(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def format_month_label(key: str) -> str:
    """Turn '2025-09' into '2025 Szep'."""
    year, month = key.split("-")
    return f"{year} {MONTH_ABBREVIATIONS[int(month) - 1]}"


def statistics_window_start(today: date, months: int = STATISTICS_WINDOW_MONTHS) -> date:
    """The date ``months`` calendar months before ``today``, clamped to month length."""
    month_index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    _, days_in_month = monthrange(year, month)
    return date(year, month, min(today.day, days_in_month))


def calculate_statistics(
    records: Iterable[DailyRecord], today: date | None = None
) -> StatisticsSummary:
    """
    Group the trailing six months of logs by calendar month.

    Work days count logged records, not business days. Months are ordered by
    their YYYY-MM key and only labelled for display afterwards.
    """
    if today is None:
        today = date.today()
    window_start = statistics_window_start(today)

    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for record in records:
        if record.date < window_start:
            continue
        key = record.date.strftime("%Y-%m")
        totals[key] = totals.get(key, 0.0) + record.work_hours
        counts[key] = counts.get(key, 0) + 1

    months = [
        MonthlyStats(
            key=key,
            month=format_month_label(key),
            total_hours=round_one_decimal(totals[key]),
            average_hours=round_one_decimal(totals[key] / counts[key]),
            work_days=counts[key],
        )
        for key in sorted(totals)
    ]

    total_work_days = sum(stats.work_days for stats in months)
    total_hours = sum(stats.total_hours for stats in months)
    overall_average = round_one_decimal(total_hours / total_work_days) if total_work_days else 0.0

    return StatisticsSummary(
        months=months,
        total_work_days=total_work_days,
        total_hours=total_hours,
        overall_average=overall_average,
    )
