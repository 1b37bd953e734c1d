"""Tests for work log entry validation and saving."""

import tempfile
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from munkaido.backend import LocalDatabase
from munkaido.entry import parse_entry, parse_work_hours, save_entry
from munkaido.errors import EntryValidationError, GatewayError
from munkaido.models import AuthSession


def test_parse_entry_derives_departure():
    """Departure is derived from arrival, hours and the applied break."""
    record = parse_entry("2025-09-15", "07:00", "8", "20", True)

    assert record.date == date(2025, 9, 15)
    assert record.arrival_time == "07:00"
    assert record.departure_time == "15:20"
    assert record.work_hours == 8.0
    assert record.unpaid_break_minutes == 20
    assert record.unpaid_break_applied is True


def test_parse_entry_break_not_applied():
    """The break is stored but not added to the departure."""
    record = parse_entry("2025-09-15", "07:00", "8", "20", False)

    assert record.departure_time == "15:00"
    assert record.unpaid_break_minutes == 20
    assert record.unpaid_break_applied is False


@pytest.mark.parametrize(
    "fields",
    [
        ("", "07:00", "8", "20"),
        ("2025-09-15", "", "8", "20"),
        ("2025-09-15", "07:00", " ", "20"),
        ("2025-09-15", "07:00", "8", ""),
    ],
)
def test_missing_fields(fields):
    """Every field is required."""
    with pytest.raises(EntryValidationError, match="összes mezőt"):
        parse_entry(*fields, True)


@pytest.mark.parametrize(
    "fields",
    [
        ("2025-02-30", "07:00", "8", "20"),
        ("2025-09-15", "7 óra", "8", "20"),
        ("2025-09-15", "07:00", "nyolc", "20"),
        ("2025-09-15", "07:00", "8", "-5"),
        ("2025-09-15", "07:00", "8", "2.5"),
        ("2025-09-15", "07:00", "nan", "20"),
        ("2025-09-15", "07:00", "inf", "20"),
        ("2025-09-15", "07:00", "1e400", "20"),
        ("2025-09-15", "07:00", "8", "\u00b2"),
    ],
)
def test_malformed_fields(fields):
    """Malformed values are rejected before anything is saved."""
    with pytest.raises(EntryValidationError):
        parse_entry(*fields, True)


def test_parse_work_hours():
    """Hours accept quarter-hour steps and a decimal comma."""
    assert parse_work_hours("7.5") == 7.5
    assert parse_work_hours("7,25") == 7.25
    assert parse_work_hours("0") == 0.0


@pytest.mark.parametrize("value", ["7.1", "-1", "8.3", "nan", "-inf", "1e400"])
def test_parse_work_hours_rejects(value):
    """Negative, non-finite or non-quarter-hour values are rejected."""
    with pytest.raises(EntryValidationError):
        parse_work_hours(value)


def test_save_entry_upserts():
    """Saving twice for the same date leaves one record with the latest values."""
    with tempfile.TemporaryDirectory() as tmp_dir, LocalDatabase(Path(tmp_dir) / "t.db") as db:
        session = db.sign_up("kovacs@example.com", "titkos123", "Kovács János")

        save_entry(db, session, parse_entry("2025-09-15", "07:00", "8", "20", True))
        save_entry(db, session, parse_entry("2025-09-15", "08:00", "6", "0", True))

        records = db.query_daily_records(session)
        assert len(records) == 1
        assert records[0].arrival_time == "08:00"
        assert records[0].departure_time == "14:00"


def test_save_entry_failure_propagates():
    """A backend failure is re-raised for the caller to report."""
    gateway = MagicMock()
    gateway.upsert_daily_record.side_effect = GatewayError("down")
    session = AuthSession(user_id="user-1", email="kovacs@example.com")

    with pytest.raises(GatewayError):
        save_entry(gateway, session, parse_entry("2025-09-15", "07:00", "8", "20", True))
