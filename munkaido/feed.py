"""Change notifications and stale-response protection."""

import logging
import threading
from collections.abc import Iterator, Mapping
from datetime import date
from typing import TypeAlias

from munkaido.backend import Gateway
from munkaido.config import DEFAULT_POLL_INTERVAL
from munkaido.errors import GatewayError
from munkaido.models import AuthSession, ChangeEvent, ChangeKind, DailyRecord

logger = logging.getLogger(__name__)

WORK_LOGS_TABLE = "work_logs"

Snapshot: TypeAlias = Mapping[date, DailyRecord]


def diff_snapshots(
    before: Snapshot, after: Snapshot, table: str = WORK_LOGS_TABLE
) -> list[ChangeEvent]:
    """Changes between two snapshots of a user's records, in date order."""
    events = []
    for target_date in sorted(before.keys() | after.keys()):
        if target_date not in before:
            kind = ChangeKind.INSERT
        elif target_date not in after:
            kind = ChangeKind.DELETE
        elif before[target_date] != after[target_date]:
            kind = ChangeKind.UPDATE
        else:
            continue
        events.append(ChangeEvent(table=table, kind=kind, date=target_date))
    return events


class ChangeFeed:
    """
    Stream of changes to the signed-in user's work log.

    The backend is polled every ``interval`` seconds and consecutive snapshots
    are compared. Iteration blocks between polls and ends once ``close`` is
    called, so it is meant to be consumed from a worker thread.
    """

    def __init__(
        self,
        gateway: Gateway,
        session: AuthSession,
        interval: float = DEFAULT_POLL_INTERVAL,
        table: str = WORK_LOGS_TABLE,
    ) -> None:
        self._gateway = gateway
        self._session = session
        self._interval = interval
        self.table = table
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Stop the feed; a blocked iteration returns at its next wake-up."""
        self._closed.set()

    def _snapshot(self) -> dict[date, DailyRecord] | None:
        try:
            records = self._gateway.query_daily_records(self._session)
        except GatewayError as e:
            logger.warning("Change feed poll failed: %s", e)
            return None
        return {record.date: record for record in records}

    def __iter__(self) -> Iterator[ChangeEvent]:
        snapshot = self._snapshot()
        while not self._closed.wait(self._interval):
            current = self._snapshot()
            if current is None:
                continue
            if snapshot is not None:
                yield from diff_snapshots(snapshot, current, self.table)
            snapshot = current


def subscribe_to_changes(
    gateway: Gateway, session: AuthSession, interval: float = DEFAULT_POLL_INTERVAL
) -> ChangeFeed:
    """Open a change feed on the user's work log table."""
    return ChangeFeed(gateway, session, interval)


class RequestTracker:
    """
    Hands out increasing tokens so only the newest request applies its result.

    A reload calls ``begin`` before fetching and checks ``is_current`` before
    touching the UI; anything superseded in the meantime is dropped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def begin(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest
