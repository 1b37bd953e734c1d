"""Tests for time arithmetic."""

import pytest

from munkaido.duration import (
    Duration,
    delta_to_minutes,
    derive_departure,
    elapsed_minutes,
    format_delta,
    format_signed_total,
    format_worked,
    parse_time_to_minutes,
    signed_delta,
)
from munkaido.errors import InvalidTimeError


def test_parse():
    """Test parsing time-of-day strings."""
    assert Duration.parse("09:30").minutes == 9 * 60 + 30
    assert Duration.parse("00:00").minutes == 0
    assert Duration.parse("23:59").minutes == 23 * 60 + 59
    assert parse_time_to_minutes("07:00") == 420


@pytest.mark.parametrize("value", ["", "7:00", "24:00", "12:60", "07:00:00", "ab:cd"])
def test_parse_rejects_invalid(value):
    """Only zero-padded 24-hour HH:MM is accepted."""
    with pytest.raises(InvalidTimeError):
        Duration.parse(value)


def test_invalid_time_is_value_error():
    """InvalidTimeError can be caught as a plain ValueError."""
    with pytest.raises(ValueError):
        parse_time_to_minutes("25:00")


def test_str():
    """Test string representation."""
    assert str(Duration(90)) == "01:30"
    assert str(Duration(-30)) == "-00:30"


def test_clock_wraps():
    """Clock format wraps around midnight."""
    assert Duration(25 * 60).clock() == "01:00"
    assert Duration(-60).clock() == "23:00"


def test_arithmetic():
    """Test duration operators."""
    assert (Duration(60) + Duration(30)).minutes == 90
    assert (Duration(90) - Duration(30)).minutes == 60
    assert (-Duration(60)).minutes == -60
    assert abs(Duration(-60)) == Duration(60)
    assert Duration(60) < Duration(90)
    assert bool(Duration(0)) is False


def test_elapsed_minutes_default_day():
    """07:00-15:00 with a 20 minute break is 7h40m."""
    assert elapsed_minutes("07:00", "15:00", 20) == 460


def test_elapsed_minutes_does_not_wrap_midnight():
    """An overnight shift is not special-cased; the result goes negative."""
    assert elapsed_minutes("22:00", "06:00", 0) == -16 * 60


def test_signed_delta_short_by_minutes():
    """A deficit under one hour puts the sign on the minutes."""
    assert signed_delta(460, 480) == (0, -20)


def test_signed_delta_over_by_minutes():
    """Test a surplus under one hour."""
    assert signed_delta(500, 480) == (0, 20)


def test_signed_delta_whole_hours():
    """Test an exact surplus of two hours."""
    assert signed_delta(600, 480) == (2, 0)


def test_signed_delta_negative_hours():
    """The hours carry the sign once the deficit reaches an hour."""
    assert signed_delta(390) == (-1, 30)
    assert signed_delta(420) == (-1, 0)


def test_delta_to_minutes_round_trips_sign():
    """Recombining a delta pair gives back the signed difference."""
    for elapsed in (300, 390, 460, 480, 500, 600):
        assert delta_to_minutes(*signed_delta(elapsed)) == elapsed - 480


def test_derive_departure_break_applied():
    """The break is added to the departure when applied."""
    assert derive_departure("07:00", 8, 20, True) == "15:20"


def test_derive_departure_break_not_applied():
    """The break is ignored when not applied."""
    assert derive_departure("07:00", 8, 20, False) == "15:00"


def test_derive_departure_wraps_midnight():
    """Departure wraps past midnight."""
    assert derive_departure("23:00", 2, 0, True) == "01:00"


def test_derive_departure_quarter_hours():
    """Fractional hours are converted to minutes."""
    assert derive_departure("08:10", 7.75, 30, True) == "16:25"


def test_format_delta():
    """Test per-day delta rendering."""
    assert format_delta(0, -20) == "-0 óra 20 perc"
    assert format_delta(0, 20) == "0 óra 20 perc"
    assert format_delta(2, 0) == "2 óra 0 perc"
    assert format_delta(-1, 30) == "-1 óra 30 perc"


def test_format_signed_total():
    """Totals always carry an explicit sign."""
    assert format_signed_total(20) == "+0 óra 20 perc"
    assert format_signed_total(0) == "+0 óra 0 perc"
    assert format_signed_total(-65) == "-1 óra 5 perc"


def test_format_worked():
    """Test worked time rendering."""
    assert format_worked(7, 40) == "7 óra 40 perc"
