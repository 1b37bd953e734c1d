"""Tests for CSV export."""

from datetime import date

import pytest

from munkaido.errors import NothingToExportError
from munkaido.export import export_csv, export_filename, render_csv
from munkaido.models import DailyRecord

RECORDS = [
    DailyRecord(date(2025, 9, 16), "08:00", "15:30", 7.5, 0, False),
    DailyRecord(date(2025, 9, 15), "07:00", "15:20", 8.0, 20, True),
]


def test_export_filename():
    """Test the export file name."""
    assert export_filename(date(2025, 9, 30)) == "munkaido_2025-09-30.csv"


def test_render_csv():
    """Header, ascending rows, Igen/Nem and a leading BOM."""
    text = render_csv(RECORDS)

    assert text.startswith("\ufeff")
    lines = text.removeprefix("\ufeff").split("\n")
    assert lines == [
        "Dátum;Érkezés;Távozás;Munkaidő (óra);Nem fizetett szünet (perc);Alkalmazva?",
        "2025-09-15;07:00;15:20;8;20;Igen",
        "2025-09-16;08:00;15:30;7.5;0;Nem",
    ]


def test_export_refuses_empty(tmp_path):
    """Nothing is written when there are no records."""
    with pytest.raises(NothingToExportError):
        export_csv([], tmp_path, date(2025, 9, 30))

    assert list(tmp_path.iterdir()) == []


def test_export_writes_file(tmp_path):
    """The file is UTF-8 with a byte-order mark."""
    path = export_csv(RECORDS, tmp_path / "exports", date(2025, 9, 30))

    assert path == tmp_path / "exports" / "munkaido_2025-09-30.csv"
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert "Igen" in raw.decode("utf-8-sig")
