"""Tests for change notifications and the stale-response guard."""

import threading
from datetime import date
from unittest.mock import MagicMock

from munkaido.errors import GatewayError
from munkaido.feed import ChangeFeed, RequestTracker, diff_snapshots, subscribe_to_changes
from munkaido.models import AuthSession, ChangeEvent, ChangeKind, DailyRecord

SESSION = AuthSession(user_id="user-1", email="kovacs@example.com")

MONDAY = DailyRecord(date(2025, 9, 15), "07:00", "15:20", 8.0, 20, True)
MONDAY_LATE = DailyRecord(date(2025, 9, 15), "09:00", "17:20", 8.0, 20, True)
TUESDAY = DailyRecord(date(2025, 9, 16), "07:00", "15:20", 8.0, 20, True)


def snapshot(*records):
    return {record.date: record for record in records}


def test_diff_snapshots():
    """Inserted, updated and deleted dates are reported in date order."""
    before = snapshot(MONDAY)
    after = snapshot(MONDAY_LATE, TUESDAY)

    assert diff_snapshots(before, after) == [
        ChangeEvent("work_logs", ChangeKind.UPDATE, date(2025, 9, 15)),
        ChangeEvent("work_logs", ChangeKind.INSERT, date(2025, 9, 16)),
    ]
    assert diff_snapshots(after, snapshot(TUESDAY)) == [
        ChangeEvent("work_logs", ChangeKind.DELETE, date(2025, 9, 15)),
    ]


def test_diff_snapshots_unchanged():
    """Identical snapshots produce no events."""
    assert diff_snapshots(snapshot(MONDAY), snapshot(MONDAY)) == []


def test_feed_yields_changes():
    """Each poll is compared with the previous one."""
    gateway = MagicMock()
    gateway.query_daily_records.side_effect = [
        [MONDAY],
        [MONDAY, TUESDAY],
        [MONDAY_LATE, TUESDAY],
    ]
    feed = ChangeFeed(gateway, SESSION, interval=0)
    events = iter(feed)

    assert next(events) == ChangeEvent("work_logs", ChangeKind.INSERT, date(2025, 9, 16))
    assert next(events) == ChangeEvent("work_logs", ChangeKind.UPDATE, date(2025, 9, 15))
    feed.close()
    gateway.query_daily_records.assert_called_with(SESSION)


def test_feed_survives_failed_poll():
    """A failed poll is skipped; the next good one becomes the baseline."""
    gateway = MagicMock()
    gateway.query_daily_records.side_effect = [
        GatewayError("down"),
        [MONDAY],
        [MONDAY, TUESDAY],
    ]
    feed = subscribe_to_changes(gateway, SESSION, interval=0)

    assert next(iter(feed)) == ChangeEvent("work_logs", ChangeKind.INSERT, date(2025, 9, 16))
    feed.close()


def test_closed_feed_stops():
    """Closing the feed ends iteration."""
    gateway = MagicMock()
    gateway.query_daily_records.return_value = [MONDAY]
    feed = ChangeFeed(gateway, SESSION, interval=60)
    feed.close()

    assert list(feed) == []
    assert feed.closed


def test_close_wakes_blocked_iteration():
    """A consumer blocked between polls returns promptly after close."""
    gateway = MagicMock()
    gateway.query_daily_records.return_value = [MONDAY]
    feed = ChangeFeed(gateway, SESSION, interval=60)
    consumer = threading.Thread(target=lambda: list(feed))
    consumer.start()

    feed.close()
    consumer.join(timeout=5)

    assert not consumer.is_alive()


def test_request_tracker_latest_wins():
    """Only the newest token is current."""
    tracker = RequestTracker()
    first = tracker.begin()
    second = tracker.begin()

    assert not tracker.is_current(first)
    assert tracker.is_current(second)
