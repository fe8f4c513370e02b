"""
Conversion orchestration for the Parcel GUI.

The orchestrator owns the whole workflow state: the selected paths, whether
a conversion is in flight, the last terminal outcome, the log polling
cadence and the pending user notification. The presentation layer submits
commands and re-renders from the orchestrator's signals; it never changes
this state directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, Qt, Signal, Slot

from .backend_interface import BackendGateway, ConversionRequest, ConversionResult
from .config import DEFAULT_CONFIG
from .conversion_state import ConversionStatus, SelectionState, derive_status
from .log_sync import LogSynchronizer

logger = logging.getLogger(__name__)


class Command(Enum):
    """User commands accepted by the orchestrator; values name the handling method."""

    SELECT_OUTPUT_FOLDER = "select_output_folder"
    SELECT_INPUT_FILE = "select_input_file"
    RUN_CONVERSION = "run_conversion"
    CLEAR_LOGS = "clear_logs"
    OPEN_OUTPUT_FOLDER = "open_output_folder"
    DISMISS_NOTIFICATION = "dismiss_notification"


@dataclass(frozen=True)
class Notification:
    """
    One-shot outcome shown to the user until dismissed.

    Attributes:
        status: "success" or "error"
        title: Dialog title
        message: Dialog body
        output_path: Folder offered by the "Open Folder" action, if any
    """

    status: str
    title: str
    message: str
    output_path: str | None = None


class ConversionOrchestrator(QObject):
    """
    State machine for the select → convert workflow.

    At most one conversion is in flight; run_conversion() while one is
    running is ignored.

    Signals:
        selectionChanged(object): New SelectionState
        statusChanged(object): New ConversionStatus
        convertingChanged(bool): A conversion started or finished
        cadenceChanged(int): New log polling interval in milliseconds
        notificationRaised(object): Notification to show
        notificationDismissed(): The current notification was dismissed
    """

    selectionChanged = Signal(object)
    statusChanged = Signal(object)
    convertingChanged = Signal(bool)
    cadenceChanged = Signal(int)
    notificationRaised = Signal(object)
    notificationDismissed = Signal()

    # Internal: queued hop that serializes submitted commands
    _commandPosted = Signal(object)

    def __init__(
        self,
        gateway: BackendGateway,
        *,
        idle_poll_ms: int = DEFAULT_CONFIG["log_poll_idle_ms"],
        active_poll_ms: int = DEFAULT_CONFIG["log_poll_active_ms"],
        parent: QObject | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            gateway: Backend used for every external operation
            idle_poll_ms: Log polling interval while no conversion runs
            active_poll_ms: Log polling interval during a conversion
            parent: Parent QObject for lifetime management
        """
        super().__init__(parent)
        self._gateway = gateway
        self._idle_poll_ms = idle_poll_ms
        self._active_poll_ms = active_poll_ms

        self._selection = SelectionState()
        self._is_converting = False
        self._last_outcome: ConversionStatus | None = None
        self._last_output_path: str | None = None
        self._notification: Notification | None = None
        self._status = ConversionStatus.idle()
        self._poll_interval_ms = idle_poll_ms

        self.log_sync = LogSynchronizer(gateway, self)

        self._commandPosted.connect(self._dispatch, Qt.ConnectionType.QueuedConnection)

    # Observable state

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def status(self) -> ConversionStatus:
        return self._status

    @property
    def is_converting(self) -> bool:
        return self._is_converting

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    @property
    def idle_poll_ms(self) -> int:
        return self._idle_poll_ms

    @property
    def active_poll_ms(self) -> int:
        return self._active_poll_ms

    @property
    def last_output_path(self) -> str | None:
        return self._last_output_path

    @property
    def notification(self) -> Notification | None:
        return self._notification

    @property
    def can_run_conversion(self) -> bool:
        return self._selection.can_run_conversion(self._is_converting)

    # Lifecycle

    def start(self) -> None:
        """Leave the Idle state and begin polling the log at the idle cadence."""
        self._recompute_status()
        self._set_poll_interval(self._idle_poll_ms, force=True)

    def shutdown(self) -> None:
        """Stop polling and release the backend."""
        self.log_sync.stop()
        self._gateway.shutdown()

    # Commands

    def submit(self, command: Command) -> None:
        """Queue a command for execution on the orchestrator's thread."""
        self._commandPosted.emit(command)

    @Slot(object)
    def _dispatch(self, command: Command) -> None:
        logger.debug(f"Dispatching {command.name}")
        getattr(self, command.value)()

    def select_output_folder(self) -> None:
        """Ask the backend for an output folder."""
        self._gateway.select_output_folder().then(
            self._on_output_folder_selected,
            lambda error: self._on_selection_failed("output folder", error),
        )

    def select_input_file(self) -> None:
        """
        Ask the backend for an input file.

        Not gated on the output folder; the presentation layer disables the
        control instead.
        """
        self._gateway.select_input_file().then(
            self._on_input_file_selected,
            lambda error: self._on_selection_failed("input file", error),
        )

    def run_conversion(self) -> None:
        """Start converting the selected file into the selected folder."""
        if not self.can_run_conversion:
            logger.debug("Ignoring conversion request: not ready or already converting")
            return

        request = ConversionRequest(input_path=self._selection.input_file, output_folder=self._selection.output_folder)

        self._last_outcome = None
        self._set_converting(True)
        self._recompute_status()
        self._set_poll_interval(self._active_poll_ms)

        logger.info(f"Starting conversion: {request.input_path} -> {request.output_folder}")
        # The log view is brought up to date before the backend call starts
        self.log_sync.refresh().always(lambda: self._call_backend(request))

    def clear_logs(self) -> None:
        self.log_sync.clear()

    def open_output_folder(self) -> None:
        """Open the folder produced by the last successful conversion."""
        if self._last_output_path:
            self._gateway.open_folder(self._last_output_path).then(
                None, lambda error: logger.error(f"Failed to open folder: {error}")
            )
        self.dismiss_notification()

    def dismiss_notification(self) -> None:
        if self._notification is None:
            return
        self._notification = None
        self.notificationDismissed.emit()

    # Selection outcomes

    def _on_output_folder_selected(self, path: Any) -> None:
        if not path:
            logger.debug("Output folder selection cancelled")
            return
        self._update_selection(self._selection.with_output_folder(str(path)))

    def _on_input_file_selected(self, path: Any) -> None:
        if not path:
            logger.debug("Input file selection cancelled")
            return
        self._update_selection(self._selection.with_input_file(str(path)))

    def _on_selection_failed(self, what: str, error: Any) -> None:
        logger.error(f"Failed to select {what}: {error}")
        self._raise_notification(Notification(status="error", title="Selection Failed", message=str(error)))

    def _update_selection(self, selection: SelectionState) -> None:
        self._selection = selection
        # A new selection supersedes the previous outcome
        self._last_outcome = None
        self.selectionChanged.emit(selection)
        self._recompute_status()

    # Conversion outcomes

    def _call_backend(self, request: ConversionRequest) -> None:
        self._gateway.run_conversion(request).then(self._on_conversion_succeeded, self._on_conversion_failed)

    def _on_conversion_succeeded(self, result: ConversionResult) -> None:
        logger.info(f"Conversion completed: {result.output_path}")
        self._last_output_path = result.output_path
        self._last_outcome = ConversionStatus.succeeded(result.output_path, result.message)
        self._set_status(self._last_outcome)

        notification = Notification(
            status="success",
            title="Conversion Completed",
            message=result.message,
            output_path=result.output_path,
        )
        # Final log lines are fetched before the outcome is announced
        self.log_sync.refresh().always(lambda: self._finish_conversion(notification))

    def _on_conversion_failed(self, error: Any) -> None:
        message = str(error)
        logger.error(f"Conversion failed: {message}")
        self._last_outcome = ConversionStatus.failed(message)
        self._set_status(self._last_outcome)

        notification = Notification(status="error", title="Conversion Failed", message=message)
        self.log_sync.refresh().always(lambda: self._finish_conversion(notification))

    def _finish_conversion(self, notification: Notification) -> None:
        self._raise_notification(notification)

        self._set_converting(False)
        self._set_poll_interval(self._idle_poll_ms)
        self._recompute_status()

    # State helpers

    def _raise_notification(self, notification: Notification) -> None:
        self._notification = notification
        self.notificationRaised.emit(notification)

    def _set_converting(self, converting: bool) -> None:
        self._is_converting = converting
        self.convertingChanged.emit(converting)

    def _recompute_status(self) -> None:
        self._set_status(derive_status(self._selection, self._is_converting, self._last_outcome))

    def _set_status(self, status: ConversionStatus) -> None:
        if status == self._status:
            return
        self._status = status
        self.statusChanged.emit(status)

    def _set_poll_interval(self, interval_ms: int, force: bool = False) -> None:
        if interval_ms == self._poll_interval_ms and not force:
            return
        self._poll_interval_ms = interval_ms
        self.log_sync.start(interval_ms)
        self.cadenceChanged.emit(interval_ms)
