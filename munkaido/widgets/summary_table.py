"""Monthly summary table widget."""

from rich.text import Text
from textual.widgets import DataTable

from munkaido.duration import format_delta, format_worked
from munkaido.models import MonthSummary


class SummaryTable(DataTable):
    """Table of the business days of a month with their over/under-time."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up the table columns."""
        self.add_column("Dátum", width=12)
        self.add_column("Érkezés", width=8)
        self.add_column("Távozás", width=8)
        self.add_column("Nem fiz. szünet", width=15)
        self.add_column("Munkaóra", width=15)
        self.add_column("Plusz/Mínusz", width=16)
        self.add_column("Ünnep")

    def load_summary(self, summary: MonthSummary) -> None:
        """Load a month summary into the table."""
        self.clear()

        for day in summary.days:
            if day.is_holiday:
                row_style = "yellow"
            elif day.is_default:
                row_style = "dim"
            else:
                row_style = ""
            delta_style = "red" if day.is_negative else "green"

            self.add_row(
                Text(day.date.isoformat(), style=row_style),
                Text(day.arrival, style=row_style),
                Text(day.departure, style=row_style),
                Text(f"{day.unpaid_break} perc", style=row_style),
                Text(format_worked(day.worked_hours, day.worked_minutes), style=row_style),
                Text(format_delta(day.plus_minus_hours, day.plus_minus_minutes), style=delta_style),
                Text(day.holiday_name or "", style=row_style),
                key=day.date.isoformat(),
            )
