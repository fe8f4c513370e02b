"""
Backend interface consumed by the conversion orchestrator.

Every backend operation is asynchronous: it returns a GatewayCall right
away and settles it later with a result or an error. The orchestrator only
ever talks to a backend through this interface, which keeps it testable with
a scripted fake backend.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from PySide6.QtCore import QObject, Signal, Slot

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[Any], None]


@dataclass(frozen=True)
class ConversionRequest:
    """Paths sent to the backend's conversion operation."""

    input_path: str
    output_folder: str


@dataclass(frozen=True)
class ConversionResult:
    """
    Result of a successful conversion.

    Attributes:
        output_path: Folder the converted project was written to
        message: Human-readable summary for the success notification
    """

    output_path: str
    message: str


class GatewayCall(QObject):
    """
    Single-shot pending result of a backend operation.

    Callbacks registered with then() run in registration order when the call
    settles, or immediately if it has already settled.

    Signals:
        succeeded(object): Result value
        failed(object): Error value (usually a BaseAppError)
        settled(): Emitted after either of the above
    """

    succeeded = Signal(object)
    failed = Signal(object)
    settled = Signal()

    def __init__(self, operation: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.operation = operation
        self._done = False
        self._ok = False
        self._value: Any = None
        self._callbacks: list[tuple[SuccessCallback | None, FailureCallback | None]] = []

    def is_done(self) -> bool:
        return self._done

    def is_ok(self) -> bool:
        """Whether the call settled successfully."""
        return self._done and self._ok

    def result(self) -> Any:
        """Result value, or None if the call failed or is pending."""
        return self._value if self.is_ok() else None

    def error(self) -> Any:
        """Error value, or None if the call succeeded or is pending."""
        return self._value if self._done and not self._ok else None

    def then(
        self,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> GatewayCall:
        """Register outcome callbacks; returns self for chaining."""
        if self._done:
            self._invoke(on_success, on_failure)
        else:
            self._callbacks.append((on_success, on_failure))
        return self

    def always(self, callback: Callable[[], None]) -> GatewayCall:
        """Register a callback that runs whatever the outcome."""
        return self.then(lambda _result: callback(), lambda _error: callback())

    @Slot(object)
    def resolve(self, value: Any) -> None:
        """Settle the call successfully."""
        if self._settle(True, value):
            self.succeeded.emit(value)
            self._finish()

    @Slot(object)
    def reject(self, error: Any) -> None:
        """Settle the call with an error."""
        if self._settle(False, error):
            self.failed.emit(error)
            self._finish()

    def _settle(self, ok: bool, value: Any) -> bool:
        if self._done:
            logger.warning(f"Ignoring second outcome for '{self.operation}' call")
            return False
        self._done = True
        self._ok = ok
        self._value = value
        return True

    def _finish(self) -> None:
        self.settled.emit()
        callbacks, self._callbacks = self._callbacks, []
        for on_success, on_failure in callbacks:
            self._invoke(on_success, on_failure)

    def _invoke(self, on_success: SuccessCallback | None, on_failure: FailureCallback | None) -> None:
        if self._ok and on_success is not None:
            on_success(self.result())
        elif not self._ok and on_failure is not None:
            on_failure(self.error())


class BackendGateway(QObject):
    """
    Interface to the external worker that converts files and owns the log.

    Subclasses implement every operation; each returns a GatewayCall.
    """

    def select_output_folder(self) -> GatewayCall:
        """Ask the user for an output folder; resolves to a path or None if cancelled."""
        raise NotImplementedError

    def select_input_file(self) -> GatewayCall:
        """Ask the user for an input file; resolves to a path or None if cancelled."""
        raise NotImplementedError

    def run_conversion(self, request: ConversionRequest) -> GatewayCall:
        """Convert a file; resolves to a ConversionResult."""
        raise NotImplementedError

    def fetch_logs(self) -> GatewayCall:
        """Resolve to the full current log buffer as a list of LogEntry."""
        raise NotImplementedError

    def clear_logs(self) -> GatewayCall:
        """Empty the log buffer; resolves to None."""
        raise NotImplementedError

    def open_folder(self, path: str) -> GatewayCall:
        """Show a folder in the platform file manager; resolves to None."""
        raise NotImplementedError

    def shutdown(self) -> None:
        """Release resources held by the backend."""
