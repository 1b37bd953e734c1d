"""Raw work log table widget."""

from textual.widgets import DataTable

from munkaido.models import DailyRecord


class WorkLogTable(DataTable):
    """Table of every stored work log entry, newest first."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up the table columns."""
        self.add_column("Dátum", width=12)
        self.add_column("Érkezés", width=8)
        self.add_column("Távozás", width=8)
        self.add_column("Munkaóra", width=11)
        self.add_column("Nem fiz. szünet", width=15)
        self.add_column("Alkalmazva?")

    def load_records(self, records: list[DailyRecord]) -> None:
        """Load records into the table in the order given."""
        self.clear()
        for record in records:
            self.add_row(
                record.date.isoformat(),
                record.arrival_time,
                record.departure_time,
                f"{record.work_hours:.2f} óra",
                f"{record.unpaid_break_minutes} perc",
                "Igen" if record.unpaid_break_applied else "Nem",
                key=record.date.isoformat(),
            )
