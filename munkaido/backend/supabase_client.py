"""Supabase (GoTrue + PostgREST) gateway."""

import logging
from datetime import date
from typing import Any, Self

import requests

from munkaido.errors import AuthError, GatewayError, InvalidCredentialsError
from munkaido.models import AuthSession, DailyRecord, Holiday

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds
WORK_LOGS_TABLE = "work_logs"
HOLIDAYS_TABLE = "hungarian_holidays"
PROFILES_TABLE = "profiles"


def _normalize_time(value: str) -> str:
    """Postgres time columns come back as 'HH:MM:SS'; keep 'HH:MM'."""
    return value[:5]


def _error_message(response: requests.Response) -> str:
    """Best-effort human readable message from a Supabase error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return response.reason


def record_from_row(row: dict[str, Any]) -> DailyRecord:
    """Build a DailyRecord from a work_logs row."""
    return DailyRecord(
        date=date.fromisoformat(row["date"]),
        arrival_time=_normalize_time(row["arrival_time"]),
        departure_time=_normalize_time(row["departure_time"]),
        work_hours=float(row["work_hours"]),
        unpaid_break_minutes=row.get("unpaid_break_minutes") or 0,
        unpaid_break_applied=bool(row.get("unpaid_applied")),
    )


class SupabaseClient:
    """Connection to a Supabase project."""

    def __init__(self, url: str, anon_key: str) -> None:
        self._url: str = url.rstrip("/")
        self._anon_key: str = anon_key
        self._session: requests.Session | None = None

    def connect(self) -> Self:
        """Open the HTTP session; closed again by ``close``."""
        if not self._session:
            self._session = requests.Session()
            self._session.headers.update({"apikey": self._anon_key})
        return self

    def __enter__(self) -> Self:
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session:
            self._session.close()
        self._session = None

    @property
    def session(self) -> requests.Session:
        """Get the active session; a closed client behaves like an unreachable server."""
        if not self._session:
            msg = "SupabaseClient is not connected"
            raise GatewayError(msg)
        return self._session

    def _request(
        self,
        method: str,
        path: str,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        """Send a request, turning transport failures into GatewayError."""
        headers = kwargs.pop("headers", {})
        headers["Authorization"] = f"Bearer {access_token or self._anon_key}"
        logger.debug("%s %s", method, path)
        try:
            return self.session.request(
                method,
                f"{self._url}{path}",
                headers=headers,
                timeout=REQUEST_TIMEOUT,
                **kwargs,
            )
        except requests.RequestException as e:
            msg = f"Could not reach Supabase: {e}"
            raise GatewayError(msg) from e

    def _checked(self, response: requests.Response) -> requests.Response:
        if not response.ok:
            msg = f"Supabase request failed ({response.status_code}): {_error_message(response)}"
            raise GatewayError(msg)
        return response

    @staticmethod
    def _session_from_body(body: dict[str, Any]) -> AuthSession:
        user = body["user"]
        metadata = user.get("user_metadata") or {}
        return AuthSession(
            user_id=user["id"],
            email=user.get("email", ""),
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token", ""),
            full_name=metadata.get("full_name", ""),
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401):
            raise InvalidCredentialsError
        self._checked(response)
        return self._session_from_body(response.json())

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession:
        """Register a new account and return its session."""
        response = self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )
        if 400 <= response.status_code < 500:
            raise AuthError(_error_message(response))
        body = self._checked(response).json()
        if "access_token" not in body:
            # Project requires email confirmation before the first sign-in
            msg = "Erősítsd meg az email címed, majd jelentkezz be"
            raise AuthError(msg)
        return self._session_from_body(body)

    def sign_out(self, session: AuthSession) -> None:
        """Invalidate the session's refresh token."""
        self._checked(self._request("POST", "/auth/v1/logout", session.access_token))

    def fetch_full_name(self, session: AuthSession) -> str:
        """Display name from the user's profile, falling back to the email."""
        response = self._checked(
            self._request(
                "GET",
                f"/rest/v1/{PROFILES_TABLE}",
                session.access_token,
                params={"select": "full_name", "id": f"eq.{session.user_id}"},
            )
        )
        rows = response.json()
        if rows and rows[0].get("full_name"):
            return rows[0]["full_name"]
        return session.full_name or session.email

    def upsert_daily_record(self, session: AuthSession, record: DailyRecord) -> None:
        """Insert or overwrite the record for (user, date)."""
        payload = {
            "user_id": session.user_id,
            "date": record.date.isoformat(),
            "arrival_time": record.arrival_time,
            "departure_time": record.departure_time,
            "work_hours": record.work_hours,
            "unpaid_break_minutes": record.unpaid_break_minutes,
            "unpaid_applied": record.unpaid_break_applied,
        }
        self._checked(
            self._request(
                "POST",
                f"/rest/v1/{WORK_LOGS_TABLE}",
                session.access_token,
                params={"on_conflict": "user_id,date"},
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
                json=payload,
            )
        )

    def query_daily_records(
        self,
        session: AuthSession,
        start: date | None = None,
        end: date | None = None,
        descending: bool = False,
    ) -> list[DailyRecord]:
        """Records of the signed-in user, ordered by date."""
        params: list[tuple[str, str]] = [
            ("select", "*"),
            ("user_id", f"eq.{session.user_id}"),
        ]
        if start is not None:
            params.append(("date", f"gte.{start.isoformat()}"))
        if end is not None:
            params.append(("date", f"lte.{end.isoformat()}"))
        params.append(("order", "date.desc" if descending else "date.asc"))

        response = self._checked(
            self._request(
                "GET", f"/rest/v1/{WORK_LOGS_TABLE}", session.access_token, params=params
            )
        )
        return [record_from_row(row) for row in response.json()]

    def query_holidays(self, start: date, end: date) -> list[Holiday]:
        """Public holidays between start and end, inclusive."""
        params = [
            ("select", "date,name"),
            ("date", f"gte.{start.isoformat()}"),
            ("date", f"lte.{end.isoformat()}"),
        ]
        response = self._checked(
            self._request("GET", f"/rest/v1/{HOLIDAYS_TABLE}", params=params)
        )
        return [
            Holiday(date=date.fromisoformat(row["date"]), name=row["name"])
            for row in response.json()
        ]
