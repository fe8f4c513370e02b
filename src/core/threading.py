"""
Threading system for non-blocking backend operations.

This module provides a QThread-based worker that runs one blocking backend
task off the GUI thread, and a runner that owns the workers' lifecycle and
settles the matching GatewayCall back on the GUI thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from .backend_interface import GatewayCall
from .errors import ErrorCode, from_exception

logger = logging.getLogger(__name__)


class GatewayWorker(QThread):
    """
    QThread-based worker for running one backend task without blocking the UI.

    Exactly one of taskSucceeded or taskFailed is emitted per run.

    Signals:
        taskSucceeded(object): The task's return value
        taskFailed(object): BaseAppError describing the failure
    """

    taskSucceeded = Signal(object)
    taskFailed = Signal(object)

    def __init__(self, task: Callable[[], Any], *, name: str, parent: QObject | None = None) -> None:
        """
        Initialize the worker.

        Args:
            task: Zero-argument callable executed in the worker thread
            name: Operation name used for the object name and logging
            parent: Parent QObject for lifetime management
        """
        super().__init__(parent)
        self._task = task
        self.setObjectName(f"GatewayWorker-{name}")

    def run(self) -> None:
        """Main worker thread execution."""
        try:
            result = self._task()
        except Exception as e:
            # Thread-safe logging without traceback formatting
            logger.error(f"{self.objectName()} failed: {e}")
            error = from_exception(e, {"worker": self.objectName()})
            if error.code is ErrorCode.UNKNOWN:
                error.code = ErrorCode.TASK_FAILED
            self.taskFailed.emit(error)
        else:
            self.taskSucceeded.emit(result)


class TaskRunner(QObject):
    """
    Manages the lifecycle of GatewayWorker threads.

    Each submitted task gets its own worker; results are delivered to the
    returned GatewayCall through queued connections so callbacks always run
    on the thread that owns the runner.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._workers: dict[GatewayWorker, GatewayCall] = {}
        self.setObjectName("TaskRunner")

    def submit(self, task: Callable[[], Any], *, name: str) -> GatewayCall:
        """
        Run a blocking task in a new worker thread.

        Args:
            task: Zero-argument callable to execute
            name: Operation name for the call and the worker

        Returns:
            GatewayCall settled with the task's result or error
        """
        call = GatewayCall(name)
        worker = GatewayWorker(task, name=name, parent=self)
        self._workers[worker] = call

        worker.taskSucceeded.connect(call.resolve, Qt.ConnectionType.QueuedConnection)
        worker.taskFailed.connect(call.reject, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(self._cleanup_worker, Qt.ConnectionType.QueuedConnection)

        logger.debug(f"Starting {worker.objectName()}")
        worker.start()
        return call

    def active_count(self) -> int:
        """Number of workers that have not been cleaned up yet."""
        return len(self._workers)

    @Slot()
    def _cleanup_worker(self) -> None:
        """Clean up a worker after its finished signal."""
        worker = self.sender()
        if not isinstance(worker, GatewayWorker) or worker not in self._workers:
            return

        call = self._workers.pop(worker)
        if not call.is_done():
            # The thread ended without emitting a terminal signal
            call.reject(from_exception(RuntimeError(f"{worker.objectName()} exited without a result")))

        worker.deleteLater()
        logger.debug(f"Worker {worker.objectName()} scheduled for deletion.")

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """
        Wait for running workers during application shutdown.

        Conversions cannot be cancelled, so this only bounds how long the
        application waits for them.
        """
        pending = self.active_count()
        if pending:
            logger.info(f"Waiting for {pending} worker(s) before shutdown")
        for worker in list(self._workers):
            if worker.isRunning() and not worker.wait(timeout_ms):
                logger.warning(f"Worker {worker.objectName()} did not finish within {timeout_ms}ms during shutdown.")
