"""Configuration management."""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "munkaido" / "config.ini"
DEFAULT_DB_PATH = Path.home() / ".config" / "munkaido" / "munkaido.db"
DEFAULT_POLL_INTERVAL = 5.0  # seconds


@dataclass
class Config:
    """Backend selection and connection settings."""

    backend: str = "local"
    supabase_url: str = ""
    supabase_anon_key: str = ""
    database_path: Path = DEFAULT_DB_PATH
    export_dir: Path = field(default_factory=Path.cwd)
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_env(cls) -> "Config | None":
        """Load configuration from environment variables."""
        poll_interval = float(os.environ.get("MUNKAIDO_POLL_INTERVAL", DEFAULT_POLL_INTERVAL))
        export_dir = Path(os.environ.get("MUNKAIDO_EXPORT_DIR", Path.cwd()))
        try:
            return cls(
                backend="supabase",
                supabase_url=os.environ["MUNKAIDO_SUPABASE_URL"],
                supabase_anon_key=os.environ["MUNKAIDO_SUPABASE_ANON_KEY"],
                export_dir=export_dir,
                poll_interval=poll_interval,
            )
        except KeyError:
            pass
        if "MUNKAIDO_DATABASE_PATH" in os.environ:
            return cls(
                backend="local",
                database_path=Path(os.environ["MUNKAIDO_DATABASE_PATH"]),
                export_dir=export_dir,
                poll_interval=poll_interval,
            )
        return None

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config | None":
        """Load configuration from file."""
        if not path.is_file():
            return None

        config = configparser.ConfigParser(interpolation=None)
        config.read(path, encoding="utf-8")
        return cls(
            backend=config.get("munkaido", "backend", fallback="local"),
            supabase_url=config.get("supabase", "url", fallback=""),
            supabase_anon_key=config.get("supabase", "anonKey", fallback=""),
            database_path=Path(config.get("local", "databasePath", fallback=str(DEFAULT_DB_PATH))),
            export_dir=Path(config.get("munkaido", "exportDir", fallback=str(Path.cwd()))),
            poll_interval=config.getfloat(
                "munkaido", "pollInterval", fallback=DEFAULT_POLL_INTERVAL
            ),
        )

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        config = configparser.ConfigParser(interpolation=None)
        config["munkaido"] = {
            "backend": self.backend,
            "exportDir": str(self.export_dir),
            "pollInterval": str(self.poll_interval),
        }
        config["supabase"] = {
            "url": self.supabase_url,
            "anonKey": self.supabase_anon_key,
        }
        config["local"] = {"databasePath": str(self.database_path)}
        with path.open("w", encoding="utf-8") as config_file:
            config.write(config_file)
