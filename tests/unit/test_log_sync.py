"""
Tests for LogSynchronizer.
"""

import pytest

from core.log_buffer import LogEntry, LogLevel
from core.log_sync import LogSynchronizer


@pytest.fixture
def log_sync(gateway):
    sync = LogSynchronizer(gateway)
    yield sync
    sync.stop()


def _entries(*messages):
    return [LogEntry(1700000000 + i, LogLevel.INFO, message) for i, message in enumerate(messages)]


class TestRefresh:
    def test_refresh_publishes_full_snapshot(self, log_sync, gateway, qtbot):
        with qtbot.waitSignal(log_sync.snapshotChanged) as blocker:
            log_sync.refresh()
            gateway.last("fetch_logs").resolve(_entries("a", "b"))

        assert blocker.args == [_entries("a", "b")]
        assert log_sync.snapshot == _entries("a", "b")

    def test_each_snapshot_replaces_the_previous(self, log_sync, gateway):
        log_sync.refresh()
        gateway.last("fetch_logs").resolve(_entries("a", "b", "c"))
        log_sync.refresh()
        gateway.last("fetch_logs").resolve(_entries("c"))

        assert log_sync.snapshot == _entries("c")

    def test_failed_fetch_keeps_previous_snapshot(self, log_sync, gateway):
        log_sync.refresh()
        gateway.last("fetch_logs").resolve(_entries("a"))

        call = log_sync.refresh()
        call.reject(RuntimeError("backend unavailable"))

        assert call.is_done()
        assert log_sync.snapshot == _entries("a")

    def test_none_result_publishes_empty_list(self, log_sync, gateway):
        log_sync.refresh()
        gateway.last("fetch_logs").resolve(None)
        assert log_sync.snapshot == []


class TestClear:
    def test_clear_publishes_empty_list_before_backend_answers(self, log_sync, gateway):
        log_sync.refresh()
        gateway.last("fetch_logs").resolve(_entries("a"))
        snapshots = []
        log_sync.snapshotChanged.connect(snapshots.append)

        log_sync.clear()

        assert snapshots == [[]]
        assert log_sync.snapshot == []
        assert gateway.count("clear_logs") == 1
        assert not gateway.last("clear_logs").is_done()

    def test_fetch_issued_before_clear_is_discarded(self, log_sync, gateway):
        log_sync.refresh()
        stale_fetch = gateway.last("fetch_logs")

        log_sync.clear()
        stale_fetch.resolve(_entries("old line"))

        assert log_sync.snapshot == []

    def test_fetch_issued_after_clear_is_applied(self, log_sync, gateway):
        log_sync.clear()
        gateway.last("clear_logs").resolve(None)

        log_sync.refresh()
        gateway.last("fetch_logs").resolve(_entries("new line"))

        assert log_sync.snapshot == _entries("new line")

    def test_clear_failure_is_logged(self, log_sync, gateway, caplog):
        log_sync.clear()
        gateway.last("clear_logs").reject(RuntimeError("denied"))

        assert "Failed to clear logs: denied" in caplog.text


class TestPolling:
    def test_start_and_stop(self, log_sync):
        log_sync.start(500)
        assert log_sync.is_active()
        assert log_sync.interval_ms == 500

        log_sync.stop()
        assert not log_sync.is_active()

    def test_restart_replaces_interval(self, log_sync):
        log_sync.start(2000)
        log_sync.start(300)
        assert log_sync.is_active()
        assert log_sync.interval_ms == 300

    def test_timer_fetches_periodically(self, log_sync, gateway, qtbot):
        log_sync.start(10)
        qtbot.waitUntil(lambda: gateway.count("fetch_logs") >= 2, timeout=2000)
