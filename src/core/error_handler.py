"""
Process-wide error capture and logging setup for the Parcel GUI.

ErrorHandler is a singleton that turns arbitrary exceptions into
BaseAppError instances, writes them to a rotating log file under the
application data directory and re-emits them as a Qt signal.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from typing import Any, ClassVar

from PySide6.QtCore import QObject, Signal

from .config import get_logs_dir
from .errors import BaseAppError, from_exception

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ERROR_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s"

ERROR_LOGGER_NAME = "parcel_gui.errors"
ERROR_LOG_FILE = "app.log"
ERROR_LOG_MAX_BYTES = 5 * 1024 * 1024
ERROR_LOG_BACKUPS = 5

MAX_CONTEXT_ITEMS = 20
MAX_CONTEXT_VALUE_LENGTH = 200


def _clip(value: Any) -> str:
    if not isinstance(value, str):
        return repr(value)[:MAX_CONTEXT_VALUE_LENGTH]
    if len(value) > MAX_CONTEXT_VALUE_LENGTH:
        return value[:MAX_CONTEXT_VALUE_LENGTH] + "..."
    return value


class ErrorHandler(QObject):
    """
    Singleton that normalizes and records unexpected errors.

    ``errorOccurred`` carries the BaseAppError produced by ``handle``.
    """

    errorOccurred = Signal(object)

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        self._setup_logging()

    def capture(self, exception: BaseException, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Convert an exception into a BaseAppError without logging it.

        The formatted traceback is attached to the error context unless the
        error already carries one.
        """
        app_error = from_exception(exception, self._sanitize_context(context or {}))

        if app_error.technical_message is None:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        app_error.context.setdefault(
            "traceback",
            "".join(traceback.format_exception(type(exception), exception, exception.__traceback__)),
        )
        return app_error

    def handle(self, exception: BaseException, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        SystemExit and KeyboardInterrupt are re-raised untouched.

        Returns:
            The normalized error
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        if self._logger is not None:
            code = app_error.code.value
            self._logger.error(f"[{code}] {app_error.user_message}", extra={"app_code": code}, exc_info=exception)

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        error_logger = logging.getLogger(ERROR_LOGGER_NAME)
        error_logger.setLevel(logging.DEBUG)
        error_logger.propagate = False
        ErrorHandler._logger = error_logger

        if error_logger.handlers:
            return

        try:
            logs_dir = get_logs_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / ERROR_LOG_FILE,
                maxBytes=ERROR_LOG_MAX_BYTES,
                backupCount=ERROR_LOG_BACKUPS,
                encoding="utf-8",
            )
        except OSError as e:
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")
            return

        file_handler.setFormatter(logging.Formatter(ERROR_LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        error_logger.addHandler(file_handler)

        if __debug__:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            error_logger.addHandler(console_handler)

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """Clip context values and cap the number of entries kept."""
        items = list(context.items())
        safe_context = {key: _clip(value) for key, value in items[:MAX_CONTEXT_ITEMS]}

        dropped = len(items) - MAX_CONTEXT_ITEMS
        if dropped > 0:
            safe_context["..."] = f"({dropped} more items truncated)"
        return safe_context

    def _on_uncaught(self, exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            self._original_excepthook(exc_type, exc_value, exc_traceback)
            return
        self.handle(exc_value, {"source": "sys.excepthook"})

    def _on_uncaught_in_thread(self, args: threading.ExceptHookArgs) -> None:
        if not isinstance(args.exc_value, Exception):
            self._original_threading_excepthook(args)
            return
        thread_name = args.thread.name if args.thread else "unknown"
        self.handle(args.exc_value, {"source": "threading.excepthook", "thread": thread_name})

    def install_hooks(self) -> None:
        """Route uncaught exceptions from any thread through ``handle``."""
        sys.excepthook = self._on_uncaught
        threading.excepthook = self._on_uncaught_in_thread

    def restore_hooks(self) -> None:
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Get the global ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """Create the error handler and install the global exception hooks."""
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the application.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR)
    """
    get_error_handler()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
