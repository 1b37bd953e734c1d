"""Main entry point for munkaido."""

import sys
from datetime import date
from pathlib import Path

from munkaido.app import MunkaidoApp
from munkaido.backend import LocalDatabase
from munkaido.config import DEFAULT_CONFIG_PATH, DEFAULT_DB_PATH, Config
from munkaido.logging_setup import setup_logging
from munkaido.models import Holiday

USAGE = """\
Usage:
  munkaido                          Start the application
  munkaido config                   Interactive configuration
  munkaido holiday YYYY-MM-DD NAME  Add a public holiday (local backend)
"""


def configure() -> Config:
    """Interactive configuration setup."""
    sys.stdout.write("Munkaidő Kalkulátor beállítás\n")
    sys.stdout.write("=" * 40 + "\n")
    backend = input("Backend (supabase/local) [local]: ").strip().lower() or "local"

    if backend == "supabase":
        config = Config(
            backend="supabase",
            supabase_url=input("Supabase URL: ").strip(),
            supabase_anon_key=input("Supabase anon key: ").strip(),
        )
    else:
        database_path = input(f"Database path [{DEFAULT_DB_PATH}]: ").strip()
        config = Config(
            backend="local",
            database_path=Path(database_path) if database_path else DEFAULT_DB_PATH,
        )

    export_dir = input(f"Export directory [{config.export_dir}]: ").strip()
    if export_dir:
        config.export_dir = Path(export_dir)

    config.save()
    sys.stdout.write("\n✓ Configuration saved successfully!\n")
    sys.stdout.write(f"Config file: {DEFAULT_CONFIG_PATH}\n")
    return config


def add_holiday(config: Config, args: list[str]) -> int:
    """Store a public holiday in the local database."""
    if config.backend != "local":
        sys.stderr.write("Holidays are managed in the Supabase project for this backend.\n")
        return 1
    if len(args) < 2:
        sys.stderr.write(USAGE)
        return 2
    try:
        holiday_date = date.fromisoformat(args[0])
    except ValueError:
        sys.stderr.write(f"Invalid date: {args[0]}\n")
        return 2

    with LocalDatabase(config.database_path) as db:
        db.add_holiday(Holiday(date=holiday_date, name=" ".join(args[1:])))
    sys.stdout.write(f"✓ {holiday_date.isoformat()} saved\n")
    return 0


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]
    if args and args[0] == "config":
        configure()
        return
    if args and args[0] in ("-h", "--help"):
        sys.stdout.write(USAGE)
        return

    # Check if config exists
    config = Config.from_env() or Config.load() or configure()

    if args and args[0] == "holiday":
        sys.exit(add_holiday(config, args[1:]))

    setup_logging()

    # Run the TUI
    app = MunkaidoApp(config)
    app.run()


if __name__ == "__main__":
    main()
