"""Tests for configuration loading and backend selection."""

from pathlib import Path

import pytest

from munkaido.backend import LocalDatabase, SupabaseClient, open_gateway
from munkaido.config import Config
from munkaido.errors import ConfigNotFoundError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "MUNKAIDO_SUPABASE_URL",
        "MUNKAIDO_SUPABASE_ANON_KEY",
        "MUNKAIDO_DATABASE_PATH",
        "MUNKAIDO_EXPORT_DIR",
        "MUNKAIDO_POLL_INTERVAL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_supabase(monkeypatch):
    """Supabase settings in the environment select the Supabase backend."""
    monkeypatch.setenv("MUNKAIDO_SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("MUNKAIDO_SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setenv("MUNKAIDO_POLL_INTERVAL", "2.5")

    config = Config.from_env()

    assert config is not None
    assert config.backend == "supabase"
    assert config.supabase_anon_key == "anon-key"
    assert config.poll_interval == 2.5


def test_from_env_local(monkeypatch, tmp_path):
    """A database path in the environment selects the local backend."""
    monkeypatch.setenv("MUNKAIDO_DATABASE_PATH", str(tmp_path / "m.db"))

    config = Config.from_env()

    assert config.backend == "local"
    assert config.database_path == tmp_path / "m.db"


def test_from_env_missing():
    """Without any settings there is no environment configuration."""
    assert Config.from_env() is None


def test_load_missing_file(tmp_path):
    """A missing config file yields None."""
    assert Config.load(tmp_path / "nope.ini") is None


def test_save_and_load(tmp_path):
    """Test saving and loading a config file."""
    path = tmp_path / "config.ini"
    config = Config(
        backend="supabase",
        supabase_url="https://project.supabase.co",
        supabase_anon_key="anon-key",
        database_path=Path("/tmp/munkaido.db"),
        export_dir=tmp_path / "exports",
        poll_interval=10.0,
    )
    config.save(path)

    assert Config.load(path) == config


def test_open_gateway_local(tmp_path):
    """The local backend opens a SQLite database."""
    gateway = open_gateway(Config(backend="local", database_path=tmp_path / "m.db"))

    assert isinstance(gateway, LocalDatabase)
    assert (tmp_path / "m.db").exists()


def test_open_gateway_supabase():
    """The Supabase backend builds an HTTP client."""
    gateway = open_gateway(
        Config(backend="supabase", supabase_url="https://x.supabase.co", supabase_anon_key="k")
    )

    assert isinstance(gateway, SupabaseClient)


def test_open_gateway_supabase_incomplete():
    """Missing Supabase settings are a configuration error."""
    with pytest.raises(ConfigNotFoundError):
        open_gateway(Config(backend="supabase"))
