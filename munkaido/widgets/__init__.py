"""Textual widgets for the TUI."""

from munkaido.widgets.entry_form import EntryForm
from munkaido.widgets.log_table import WorkLogTable
from munkaido.widgets.login_dialog import LoginDialog
from munkaido.widgets.stats_panel import StatsPanel
from munkaido.widgets.summary_table import SummaryTable

__all__ = ["EntryForm", "LoginDialog", "StatsPanel", "SummaryTable", "WorkLogTable"]
