"""CSV export of the raw work log."""

import csv
import io
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from munkaido.errors import NothingToExportError
from munkaido.models import DailyRecord

CSV_HEADER = [
    "Dátum",
    "Érkezés",
    "Távozás",
    "Munkaidő (óra)",
    "Nem fizetett szünet (perc)",
    "Alkalmazva?",
]
BOM = "\ufeff"


def export_filename(today: date) -> str:
    """File name used for an export made on ``today``."""
    return f"munkaido_{today.isoformat()}.csv"


def render_csv(records: Sequence[DailyRecord]) -> str:
    """Render records as semicolon separated text prefixed with a byte-order mark."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in sorted(records, key=lambda r: r.date):
        writer.writerow(
            [
                record.date.isoformat(),
                record.arrival_time,
                record.departure_time,
                f"{record.work_hours:g}",
                record.unpaid_break_minutes,
                "Igen" if record.unpaid_break_applied else "Nem",
            ]
        )
    # No trailing newline after the last row
    return BOM + buffer.getvalue().removesuffix("\n")


def export_csv(records: Sequence[DailyRecord], directory: Path, today: date | None = None) -> Path:
    """Write the export file into ``directory`` and return its path."""
    if not records:
        msg = "Nincs exportálható adat"
        raise NothingToExportError(msg)
    if today is None:
        today = date.today()

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    with path.open("w", encoding="utf-8", newline="") as export_file:
        export_file.write(render_csv(records))
    return path
