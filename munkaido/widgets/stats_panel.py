"""Stats panel widget showing six-month statistics."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Static

from munkaido.models import StatisticsSummary

BAR_WIDTH = 30


class StatsPanel(Vertical):
    """Panel displaying the rollup figures and a per-month breakdown."""

    def compose(self) -> ComposeResult:
        """Compose the stats panel."""
        yield Static("", id="stat-empty")
        with Horizontal(id="stats-row"):
            yield Static("", id="stat-days", classes="stat-box")
            yield Static("", id="stat-hours", classes="stat-box")
            yield Static("", id="stat-average", classes="stat-box")
        yield DataTable(id="stats-table", zebra_stripes=True)

    def on_mount(self) -> None:
        """Set up the breakdown columns."""
        table = self.query_one("#stats-table", DataTable)
        table.add_column("Hónap", width=10)
        table.add_column("Összes óra", width=11)
        table.add_column("Átlag óra/nap", width=14)
        table.add_column("Munkanap", width=9)
        table.add_column("")

    def update_stats(self, stats: StatisticsSummary) -> None:
        """Update the displayed statistics."""
        empty = self.query_one("#stat-empty", Static)
        table = self.query_one("#stats-table", DataTable)
        table.clear()

        if not stats.months:
            empty.update("Még nincs elegendő adat a statisztikákhoz.")
            empty.display = True
            self.query_one("#stats-row").display = False
            table.display = False
            return

        empty.display = False
        self.query_one("#stats-row").display = True
        table.display = True

        self.query_one("#stat-days", Static).update(
            f"[bold]Összes munkanap:[/bold] {stats.total_work_days}"
        )
        self.query_one("#stat-hours", Static).update(
            f"[bold]Összes munkaóra:[/bold] {round(stats.total_hours)} óra"
        )
        self.query_one("#stat-average", Static).update(
            f"[bold]Átlagos napi munkaóra:[/bold] {stats.overall_average} óra"
        )

        peak = max(month.total_hours for month in stats.months) or 1
        for month in stats.months:
            bar = "█" * round(month.total_hours / peak * BAR_WIDTH)
            table.add_row(
                month.month,
                f"{month.total_hours}",
                f"{month.average_hours}",
                f"{month.work_days}",
                Text(bar, style="cyan"),
                key=month.key,
            )
