"""Persistence and authentication backends."""

from datetime import date
from typing import Protocol, Self

from munkaido.backend.local_database import LocalDatabase
from munkaido.backend.supabase_client import SupabaseClient
from munkaido.config import Config
from munkaido.errors import ConfigNotFoundError
from munkaido.models import AuthSession, DailyRecord, Holiday


class Gateway(Protocol):
    """What the application needs from a backend."""

    def connect(self) -> Self: ...

    def __enter__(self) -> Self: ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None: ...

    def close(self) -> None: ...

    def sign_in(self, email: str, password: str) -> AuthSession: ...

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession: ...

    def sign_out(self, session: AuthSession) -> None: ...

    def fetch_full_name(self, session: AuthSession) -> str: ...

    def upsert_daily_record(self, session: AuthSession, record: DailyRecord) -> None: ...

    def query_daily_records(
        self,
        session: AuthSession,
        start: date | None = None,
        end: date | None = None,
        descending: bool = False,
    ) -> list[DailyRecord]: ...

    def query_holidays(self, start: date, end: date) -> list[Holiday]: ...


def open_gateway(config: Config) -> Gateway:
    """Create the backend described by the configuration (not yet connected)."""
    if config.backend == "supabase":
        if not config.supabase_url or not config.supabase_anon_key:
            msg = "Supabase backend selected but URL or anon key is missing"
            raise ConfigNotFoundError(msg)
        return SupabaseClient(config.supabase_url, config.supabase_anon_key)
    return LocalDatabase(config.database_path)


__all__ = ["Gateway", "LocalDatabase", "SupabaseClient", "open_gateway"]
