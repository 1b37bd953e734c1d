"""Work log entry validation and saving."""

import logging
import math
from datetime import date

from munkaido.backend import Gateway
from munkaido.duration import derive_departure, parse_time_to_minutes
from munkaido.errors import EntryValidationError, GatewayError, InvalidTimeError
from munkaido.models import AuthSession, DailyRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Kérlek töltsd ki az összes mezőt"


def parse_work_hours(value: str) -> float:
    """Parse a declared duration in hours at quarter-hour resolution ('8', '7.5', '7,25')."""
    try:
        hours = float(value.replace(",", "."))
    except ValueError as e:
        msg = f"Érvénytelen munkaidő: {value}"
        raise EntryValidationError(msg) from e
    if not math.isfinite(hours) or hours < 0 or (hours * 4) != int(hours * 4):
        msg = f"A munkaidő negyedórás, nem negatív érték legyen: {value}"
        raise EntryValidationError(msg)
    return hours


def parse_entry(
    entry_date: str,
    arrival_time: str,
    work_hours: str,
    unpaid_break: str,
    unpaid_break_applied: bool,
) -> DailyRecord:
    """Validate the raw form fields and build the record to upsert."""
    entry_date = entry_date.strip()
    arrival_time = arrival_time.strip()
    work_hours = work_hours.strip()
    unpaid_break = unpaid_break.strip()
    if not (entry_date and arrival_time and work_hours and unpaid_break):
        raise EntryValidationError(REQUIRED_FIELDS_MESSAGE)

    try:
        target_date = date.fromisoformat(entry_date)
    except ValueError as e:
        msg = f"Érvénytelen dátum: {entry_date}"
        raise EntryValidationError(msg) from e

    try:
        parse_time_to_minutes(arrival_time)
    except InvalidTimeError as e:
        msg = f"Érvénytelen érkezési idő: {arrival_time}"
        raise EntryValidationError(msg) from e

    hours = parse_work_hours(work_hours)

    if not (unpaid_break.isascii() and unpaid_break.isdigit()):
        msg = f"Érvénytelen szünet: {unpaid_break}"
        raise EntryValidationError(msg)
    break_minutes = int(unpaid_break)

    return DailyRecord(
        date=target_date,
        arrival_time=arrival_time,
        departure_time=derive_departure(
            arrival_time, hours, break_minutes, unpaid_break_applied
        ),
        work_hours=hours,
        unpaid_break_minutes=break_minutes,
        unpaid_break_applied=unpaid_break_applied,
    )


def save_entry(gateway: Gateway, session: AuthSession, record: DailyRecord) -> None:
    """Upsert a record for the signed-in user, overwriting any entry for that date."""
    try:
        gateway.upsert_daily_record(session, record)
    except GatewayError:
        logger.exception("Failed to save work log for %s", record.date.isoformat())
        raise
    logger.info("Saved work log for %s", record.date.isoformat())
