"""Tests for date handling in the application and the entry form."""

from datetime import date
from unittest.mock import MagicMock, patch

from munkaido.app import MunkaidoApp
from munkaido.config import Config
from munkaido.models import AuthSession
from munkaido.widgets import EntryForm

SESSION = AuthSession(user_id="user-1", email="kovacs@example.com")


def make_app(tmp_path):
    return MunkaidoApp(Config(backend="local", database_path=tmp_path / "m.db"))


def test_load_uses_date_at_call_time(tmp_path):
    """Each reload computes statistics from the date it was started on."""
    with patch("munkaido.app.date") as mock_date:
        mock_date.today.return_value = date(2025, 12, 31)
        app = make_app(tmp_path)
        app.gateway = MagicMock()
        app.auth = SESSION

        mock_date.today.return_value = date(2026, 1, 5)
        with patch.object(app, "run_worker") as run_worker:
            app.load_data_async()

    work = run_worker.call_args.args[0]
    assert work.args[-1] == date(2026, 1, 5)


def test_current_month_follows_clock(tmp_path):
    """Jumping to the current month uses today's date, not the start-up date."""
    with patch("munkaido.app.date") as mock_date:
        mock_date.today.return_value = date(2025, 12, 31)
        app = make_app(tmp_path)
        app.current_month = 6

        mock_date.today.return_value = date(2026, 1, 5)
        with patch.object(app, "query_one"), patch.object(app, "load_data_async"):
            app.action_current_month()

    assert (app.current_year, app.current_month) == (2026, 1)


def test_entry_form_date_moves_to_today():
    """An untouched date field follows the calendar day."""
    with patch("munkaido.widgets.entry_form.date") as mock_date:
        mock_date.today.return_value = date(2025, 9, 15)
        form = EntryForm()
        date_input = MagicMock(value="2025-09-15")

        mock_date.today.return_value = date(2025, 9, 16)
        with patch.object(form, "query_one", return_value=date_input):
            form.refresh_default_date()

    assert date_input.value == "2025-09-16"
    assert form.default_date == date(2025, 9, 16)


def test_entry_form_keeps_edited_date():
    """A date the user typed in is left alone."""
    with patch("munkaido.widgets.entry_form.date") as mock_date:
        mock_date.today.return_value = date(2025, 9, 15)
        form = EntryForm()
        date_input = MagicMock(value="2025-09-10")

        mock_date.today.return_value = date(2025, 9, 16)
        with patch.object(form, "query_one", return_value=date_input):
            form.refresh_default_date()

    assert date_input.value == "2025-09-10"
