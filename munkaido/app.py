"""Main Textual application."""

import logging
from datetime import date
from functools import partial
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static, TabbedContent, TabPane

from munkaido.backend import Gateway, open_gateway
from munkaido.calculator import (
    build_month_summary,
    calculate_statistics,
    month_bounds,
    statistics_window_start,
)
from munkaido.config import Config
from munkaido.duration import format_signed_total
from munkaido.entry import save_entry
from munkaido.errors import (
    AuthError,
    ConfigNotFoundError,
    GatewayError,
    InvalidCredentialsError,
    NothingToExportError,
)
from munkaido.export import export_csv
from munkaido.feed import ChangeFeed, RequestTracker, subscribe_to_changes
from munkaido.models import AuthSession, DailyRecord, MonthSummary, StatisticsSummary
from munkaido.widgets import EntryForm, LoginDialog, StatsPanel, SummaryTable, WorkLogTable

logger = logging.getLogger(__name__)


class MunkaidoApp(App):
    """Munkaidő Kalkulátor TUI application."""

    TITLE = "Munkaidő Kalkulátor"

    CSS = """
    TabbedContent {
        height: 1fr;
    }

    EntryForm {
        height: auto;
        padding: 0 1;
        border: solid $primary;
    }

    #entry-grid {
        grid-size: 2;
        grid-columns: 32 1fr;
        grid-rows: 3;
        height: auto;
    }

    #entry-grid Label {
        padding: 1 0;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #log-table, #summary-table, #stats-table {
        height: 1fr;
        border: solid $primary;
    }

    #summary-header {
        height: 3;
        padding: 1;
    }

    #summary-month {
        width: 1fr;
        text-style: bold;
    }

    #summary-total {
        width: auto;
    }

    #stats-row {
        height: 3;
    }

    .stat-box {
        width: 1fr;
        padding: 1;
        background: $panel;
    }
    """

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        ("q", "quit", "Kilépés"),
        ("r", "refresh", "Frissítés"),
        ("b", "prev_month", "Előző hónap"),
        ("n", "next_month", "Következő hónap"),
        ("c", "current_month", "Aktuális hónap"),
        ("e", "export", "CSV export"),
        ("l", "logout", "Kijelentkezés"),
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.config = config
        today = date.today()
        self.current_year = today.year
        self.current_month = today.month
        self.gateway: Gateway | None = None
        self.auth: AuthSession | None = None
        self.feed: ChangeFeed | None = None
        self.requests = RequestTracker()

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(show_clock=True)
        with TabbedContent(initial="tab-log"):
            with TabPane("Napló", id="tab-log"), Vertical():
                yield EntryForm(id="entry-form")
                yield WorkLogTable(id="log-table")
            with TabPane("Összesítés", id="tab-summary"), Vertical():
                with Horizontal(id="summary-header"):
                    yield Static("", id="summary-month")
                    yield Static("", id="summary-total")
                yield SummaryTable(id="summary-table")
            with TabPane("Statisztikák", id="tab-stats"):
                yield StatsPanel(id="stats-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Ask for credentials when the app starts."""
        self._update_month_label()
        self.show_login()

    def on_unmount(self) -> None:
        self._close_connection()

    # Session lifecycle

    def show_login(self) -> None:
        """Open the sign-in dialog."""
        self.push_screen(LoginDialog(), self.handle_login_result)

    def handle_login_result(self, result: dict | None) -> None:
        """Handle the result from the login dialog."""
        if result is None:
            self.exit()
            return
        self.run_worker(
            partial(self._authenticate, result), thread=True, exclusive=True, group="auth"
        )

    def _authenticate(self, credentials: dict) -> None:
        """Open a backend connection and sign in or register (worker thread)."""
        try:
            gateway = open_gateway(self.config).connect()
        except (ConfigNotFoundError, GatewayError) as e:
            logger.error("Could not open backend: %s", e)
            self.call_from_thread(self.notify, str(e), severity="error")
            self.call_from_thread(self.show_login)
            return

        try:
            if credentials["action"] == "sign_up":
                session = gateway.sign_up(
                    credentials["email"], credentials["password"], credentials["full_name"]
                )
            else:
                session = gateway.sign_in(credentials["email"], credentials["password"])
        except InvalidCredentialsError:
            self._auth_failed(gateway, "Hibás email vagy jelszó")
            return
        except AuthError as e:
            self._auth_failed(gateway, str(e))
            return
        except GatewayError as e:
            logger.warning("Authentication request failed: %s", e)
            self._auth_failed(gateway, "A szerver nem érhető el")
            return

        try:
            full_name = gateway.fetch_full_name(session)
        except GatewayError as e:
            logger.warning("Could not load profile: %s", e)
            full_name = session.full_name or session.email

        welcome = (
            "Sikeres regisztráció! Bejelentkezve."
            if credentials["action"] == "sign_up"
            else "Sikeres bejelentkezés!"
        )
        self.call_from_thread(self._on_signed_in, gateway, session, full_name, welcome)

    def _auth_failed(self, gateway: Gateway, message: str) -> None:
        gateway.close()
        self.call_from_thread(self.notify, message, severity="error")
        self.call_from_thread(self.show_login)

    def _on_signed_in(
        self, gateway: Gateway, session: AuthSession, full_name: str, welcome: str
    ) -> None:
        self.gateway = gateway
        self.auth = session
        self.sub_title = f"Üdv, {full_name}!"
        self.notify(welcome, severity="information")
        logger.info("Signed in as %s", session.email)

        self.feed = subscribe_to_changes(gateway, session, self.config.poll_interval)
        self.run_worker(partial(self._watch_changes, self.feed), thread=True, group="feed")
        self.load_data_async()

    def _watch_changes(self, feed: ChangeFeed) -> None:
        """Reload whenever the change feed reports something (worker thread)."""
        for event in feed:
            logger.debug("Change on %s: %s %s", event.table, event.kind.value, event.date)
            self.call_from_thread(self.load_data_async)

    def _close_connection(self) -> None:
        if self.feed:
            self.feed.close()
        self.feed = None
        if self.gateway:
            self.gateway.close()
        self.gateway = None
        self.auth = None

    def action_logout(self) -> None:
        """Sign out, tear down the connection and return to the login dialog."""
        if not self.auth or not self.gateway:
            return
        gateway, session = self.gateway, self.auth
        if self.feed:
            self.feed.close()
        self.feed = None
        self.gateway = None
        self.auth = None
        self.requests.begin()  # discard any reload still in flight
        self.run_worker(partial(self._sign_out, gateway, session), thread=True, group="auth")

        self.sub_title = ""
        self.query_one("#log-table", WorkLogTable).clear()
        self.query_one("#summary-table", SummaryTable).clear()
        self.query_one("#summary-total", Static).update("")
        self.show_login()

    def _sign_out(self, gateway: Gateway, session: AuthSession) -> None:
        try:
            gateway.sign_out(session)
        except GatewayError as e:
            logger.warning("Sign-out failed: %s", e)
        finally:
            gateway.close()

    # Data loading

    def load_data_async(self) -> None:
        """Start async data loading; results of older loads are discarded."""
        if not self.gateway or not self.auth:
            return
        token = self.requests.begin()
        self.run_worker(
            partial(
                self._fetch_and_update,
                token,
                self.gateway,
                self.auth,
                self.current_year,
                self.current_month,
                date.today(),
            ),
            thread=True,
            group="load",
        )

    def _fetch_records(self, gateway: Gateway, session: AuthSession, **kwargs) -> list[DailyRecord]:
        try:
            return gateway.query_daily_records(session, **kwargs)
        except GatewayError as e:
            logger.warning("Could not load work logs: %s", e)
            return []

    def _fetch_and_update(
        self,
        token: int,
        gateway: Gateway,
        session: AuthSession,
        year: int,
        month: int,
        today: date,
    ) -> None:
        """Fetch everything the views need and recompute (worker thread)."""
        start, end = month_bounds(year, month)
        month_records = self._fetch_records(gateway, session, start=start, end=end)
        try:
            holidays = gateway.query_holidays(start, end)
        except GatewayError as e:
            logger.warning("Could not load holidays: %s", e)
            holidays = []
        all_records = self._fetch_records(gateway, session, descending=True)
        stats_records = self._fetch_records(
            gateway, session, start=statistics_window_start(today)
        )

        summary = build_month_summary(year, month, month_records, holidays)
        stats = calculate_statistics(stats_records, today)

        self.call_from_thread(self._update_ui, token, summary, stats, all_records)

    def _update_ui(
        self,
        token: int,
        summary: MonthSummary,
        stats: StatisticsSummary,
        all_records: list[DailyRecord],
    ) -> None:
        """Update UI components (must run on main thread)."""
        if not self.requests.is_current(token):
            logger.debug("Dropping stale load %d", token)
            return

        self.query_one("#log-table", WorkLogTable).load_records(all_records)
        self.query_one("#summary-table", SummaryTable).load_summary(summary)
        total = self.query_one("#summary-total", Static)
        total_style = "red" if summary.total_minutes < 0 else "green"
        total.update(
            f"Összesen: [bold {total_style}]"
            f"{format_signed_total(summary.total_minutes)}[/bold {total_style}]"
        )
        self.query_one("#stats-panel", StatsPanel).update_stats(stats)
        self.query_one("#entry-form", EntryForm).refresh_default_date()

    def _update_month_label(self) -> None:
        self.query_one("#summary-month", Static).update(
            f"Hónap: {self.current_year}-{self.current_month:02d}"
        )

    def action_refresh(self) -> None:
        """Refresh data from the backend."""
        self.notify("Frissítés...", severity="information")
        self.load_data_async()

    def action_next_month(self) -> None:
        """Navigate to next month."""
        self.current_month += 1
        if self.current_month > 12:
            self.current_month = 1
            self.current_year += 1
        self._update_month_label()
        self.load_data_async()

    def action_prev_month(self) -> None:
        """Navigate to previous month."""
        self.current_month -= 1
        if self.current_month < 1:
            self.current_month = 12
            self.current_year -= 1
        self._update_month_label()
        self.load_data_async()

    def action_current_month(self) -> None:
        """Navigate to current month."""
        today = date.today()
        self.current_year = today.year
        self.current_month = today.month
        self.query_one("#entry-form", EntryForm).refresh_default_date()
        self._update_month_label()
        self.load_data_async()

    # Writes

    def on_entry_form_submitted(self, event: EntryForm.Submitted) -> None:
        """Save a validated entry."""
        if not self.gateway or not self.auth:
            return
        self._set_form_busy(True)
        self.run_worker(
            partial(self._save_entry, self.gateway, self.auth, event.record), thread=True
        )

    def _save_entry(self, gateway: Gateway, session: AuthSession, record: DailyRecord) -> None:
        try:
            save_entry(gateway, session, record)
        except GatewayError:
            self.call_from_thread(self.notify, "Hiba történt a mentés során", severity="error")
        else:
            self.call_from_thread(self.notify, "Bejegyzés sikeresen mentve!")
            self.call_from_thread(self.load_data_async)
        finally:
            self.call_from_thread(self._set_form_busy, False)

    def _set_form_busy(self, busy: bool) -> None:
        self.query_one("#entry-form", EntryForm).set_busy(busy)

    def action_export(self) -> None:
        """Export every work log entry to CSV."""
        if not self.gateway or not self.auth:
            return
        self.run_worker(partial(self._export, self.gateway, self.auth), thread=True)

    def _export(self, gateway: Gateway, session: AuthSession) -> None:
        try:
            records = gateway.query_daily_records(session)
        except GatewayError as e:
            logger.warning("Export query failed: %s", e)
            self.call_from_thread(
                self.notify, "Hiba történt az exportálás során", severity="error"
            )
            return

        try:
            path = export_csv(records, self.config.export_dir, date.today())
        except NothingToExportError as e:
            self.call_from_thread(self.notify, str(e), severity="error")
            return
        except OSError:
            logger.exception("Could not write CSV export")
            self.call_from_thread(
                self.notify, "Hiba történt az exportálás során", severity="error"
            )
            return

        self.call_from_thread(self.notify, f"CSV exportálva: {path}")
