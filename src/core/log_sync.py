"""
Periodic log polling for the Parcel GUI.

The synchronizer keeps the UI's view of the backend log current by fetching
the whole log buffer on a timer and publishing each fetched list as a
complete replacement of the previous one.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .backend_interface import BackendGateway, GatewayCall
from .log_buffer import LogEntry

logger = logging.getLogger(__name__)


class LogSynchronizer(QObject):
    """
    Restartable periodic poller of the backend log buffer.

    Only one timer exists, so restarting with a new interval replaces the
    previous schedule.

    Signals:
        snapshotChanged(list): The full list of LogEntry to render
    """

    snapshotChanged = Signal(list)

    def __init__(self, gateway: BackendGateway, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._gateway = gateway
        self._snapshot: list[LogEntry] = []
        # Bumped by clear(); fetches issued under an older generation are stale
        self._generation = 0

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.refresh)

    @property
    def snapshot(self) -> list[LogEntry]:
        """The most recently published log list."""
        return list(self._snapshot)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, interval_ms: int) -> None:
        """
        (Re)start periodic polling.

        Args:
            interval_ms: Milliseconds between fetches; takes effect from the
                next tick
        """
        logger.debug(f"Log polling every {interval_ms}ms")
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    @Slot()
    def refresh(self) -> GatewayCall:
        """
        Fetch the log buffer now.

        Returns:
            The pending fetch; it always settles, and failures are dropped
        """
        generation = self._generation
        call = self._gateway.fetch_logs()
        call.then(
            lambda entries: self._apply(generation, entries),
            lambda error: logger.debug(f"Log fetch failed: {error}"),
        )
        return call

    def clear(self) -> GatewayCall:
        """
        Clear the backend log and show an empty list right away.

        Returns:
            The pending clear request
        """
        self._generation += 1
        self._publish([])

        call = self._gateway.clear_logs()
        call.then(None, lambda error: logger.error(f"Failed to clear logs: {error}"))
        return call

    def _apply(self, generation: int, entries: list[LogEntry] | None) -> None:
        if generation != self._generation:
            logger.debug("Discarding log snapshot fetched before the last clear")
            return
        self._publish(list(entries or []))

    def _publish(self, entries: list[LogEntry]) -> None:
        self._snapshot = entries
        self.snapshotChanged.emit(list(entries))
