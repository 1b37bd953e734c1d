"""SQLite gateway for single-machine use."""

import hashlib
import hmac
import secrets
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Self

from munkaido.config import DEFAULT_DB_PATH
from munkaido.errors import AuthError, GatewayError, InvalidCredentialsError
from munkaido.models import AuthSession, DailyRecord, Holiday

MIN_PASSWORD_LENGTH = 6
PBKDF2_ITERATIONS = 200_000


def _hash_password(password: str, salt: bytes) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS).hex()


class LocalDatabase:
    """Stores users, work logs and holidays in a local SQLite file."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def connect(self) -> Self:
        return self

    def __enter__(self) -> Self:
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Connections are opened per operation; nothing to release."""

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                yield conn
        except sqlite3.Error as e:
            msg = f"Local database error: {e}"
            raise GatewayError(msg) from e

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    salt TEXT NOT NULL,
                    full_name TEXT
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS work_logs (
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    arrival_time TEXT NOT NULL,
                    departure_time TEXT NOT NULL,
                    work_hours REAL NOT NULL,
                    unpaid_break_minutes INTEGER NOT NULL,
                    unpaid_applied INTEGER NOT NULL,
                    PRIMARY KEY (user_id, date)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS hungarian_holidays (
                    date TEXT PRIMARY KEY,
                    name TEXT NOT NULL
                )
            """)
            conn.commit()

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        """Register a new account and return its session."""
        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"A jelszónak legalább {MIN_PASSWORD_LENGTH} karakter hosszúnak kell lennie"
            raise AuthError(msg)

        user_id = str(uuid.uuid4())
        salt = secrets.token_bytes(16)
        with self._connect() as conn:
            try:
                conn.execute(
                    "INSERT INTO users (id, email, password_hash, salt, full_name) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (user_id, email.lower(), _hash_password(password, salt), salt.hex(), full_name),
                )
            except sqlite3.IntegrityError as e:
                msg = "Ezzel az email címmel már regisztráltak"
                raise AuthError(msg) from e
            conn.commit()

        return AuthSession(
            user_id=user_id,
            email=email.lower(),
            access_token=secrets.token_urlsafe(32),
            full_name=full_name,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, email, password_hash, salt, full_name FROM users WHERE email = ?",
                (email.lower(),),
            ).fetchone()

        if not row:
            raise InvalidCredentialsError
        user_id, stored_email, password_hash, salt, full_name = row
        if not hmac.compare_digest(_hash_password(password, bytes.fromhex(salt)), password_hash):
            raise InvalidCredentialsError

        return AuthSession(
            user_id=user_id,
            email=stored_email,
            access_token=secrets.token_urlsafe(32),
            full_name=full_name or "",
        )

    def sign_out(self, session: AuthSession) -> None:
        """Local sessions are not persisted."""

    def fetch_full_name(self, session: AuthSession) -> str:
        """Display name of the user, falling back to the email."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT full_name FROM users WHERE id = ?", (session.user_id,)
            ).fetchone()
        if row and row[0]:
            return row[0]
        return session.email

    def upsert_daily_record(self, session: AuthSession, record: DailyRecord) -> None:
        """Insert or overwrite the record for (user, date)."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO work_logs
                (user_id, date, arrival_time, departure_time, work_hours,
                 unpaid_break_minutes, unpaid_applied)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.user_id,
                    record.date.isoformat(),
                    record.arrival_time,
                    record.departure_time,
                    record.work_hours,
                    record.unpaid_break_minutes,
                    1 if record.unpaid_break_applied else 0,
                ),
            )
            conn.commit()

    def query_daily_records(
        self,
        session: AuthSession,
        start: date | None = None,
        end: date | None = None,
        descending: bool = False,
    ) -> list[DailyRecord]:
        """Records of the signed-in user, ordered by date."""
        query = (
            "SELECT date, arrival_time, departure_time, work_hours, unpaid_break_minutes, "
            "unpaid_applied FROM work_logs WHERE user_id = ?"
        )
        params: list[str] = [session.user_id]
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date DESC" if descending else " ORDER BY date"

        with self._connect() as conn:
            return [
                DailyRecord(
                    date=date.fromisoformat(row[0]),
                    arrival_time=row[1],
                    departure_time=row[2],
                    work_hours=row[3],
                    unpaid_break_minutes=row[4],
                    unpaid_break_applied=bool(row[5]),
                )
                for row in conn.execute(query, params)
            ]

    def add_holiday(self, holiday: Holiday) -> None:
        """Save or rename a public holiday."""
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO hungarian_holidays (date, name) VALUES (?, ?)",
                (holiday.date.isoformat(), holiday.name),
            )
            conn.commit()

    def query_holidays(self, start: date, end: date) -> list[Holiday]:
        """Public holidays between start and end, inclusive."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT date, name FROM hungarian_holidays "
                "WHERE date >= ? AND date <= ? ORDER BY date",
                (start.isoformat(), end.isoformat()),
            )
            return [Holiday(date=date.fromisoformat(row[0]), name=row[1]) for row in cursor]
