"""Form for adding or overwriting a day's work log."""

from datetime import date

from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.message import Message
from textual.widgets import Button, Input, Label, Select, Static

from munkaido.entry import parse_entry
from munkaido.errors import EntryValidationError
from munkaido.models import DailyRecord


class EntryForm(Vertical):
    """Collects date, arrival, declared hours and unpaid break."""

    class Submitted(Message):
        """Posted with a validated record ready to be saved."""

        def __init__(self, record: DailyRecord) -> None:
            super().__init__()
            self.record = record

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.default_date = date.today()

    def compose(self) -> ComposeResult:
        """Compose the form."""
        yield Static("Napi bejegyzés hozzáadása", classes="section-title")
        with Grid(id="entry-grid"):
            yield Label("Dátum")
            yield Input(
                value=self.default_date.isoformat(), placeholder="ÉÉÉÉ-HH-NN", id="entry-date"
            )
            yield Label("Érkezés")
            yield Input(value="07:00", placeholder="HH:MM", id="entry-arrival")
            yield Label("Munkaidő (óra)")
            yield Input(value="8", placeholder="8 vagy 7.5", id="entry-hours")
            yield Label("Nem fizetett szünet (perc)")
            yield Input(value="20", placeholder="20", id="entry-break")
            yield Label("Nem fizetett szünet alkalmazva?")
            yield Select(
                [("Igen", True), ("Nem", False)],
                value=True,
                allow_blank=False,
                id="entry-applied",
            )
        yield Button("Hozzáadás / Frissítés", id="entry-submit", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "entry-submit":
            self.submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in any field submits the form."""
        self.submit()

    def submit(self) -> None:
        """Validate the fields and post the record; input stays for corrections."""
        try:
            record = parse_entry(
                self.query_one("#entry-date", Input).value,
                self.query_one("#entry-arrival", Input).value,
                self.query_one("#entry-hours", Input).value,
                self.query_one("#entry-break", Input).value,
                bool(self.query_one("#entry-applied", Select).value),
            )
        except EntryValidationError as e:
            self.notify(str(e), severity="error")
            return
        self.post_message(self.Submitted(record))

    def refresh_default_date(self) -> None:
        """Move the date field to today unless the user has changed it."""
        today = date.today()
        if today == self.default_date:
            return
        date_input = self.query_one("#entry-date", Input)
        if date_input.value == self.default_date.isoformat():
            date_input.value = today.isoformat()
        self.default_date = today

    def set_busy(self, busy: bool) -> None:
        """Disable the submit button while a save is in flight."""
        button = self.query_one("#entry-submit", Button)
        button.disabled = busy
        button.label = "Mentés..." if busy else "Hozzáadás / Frissítés"
