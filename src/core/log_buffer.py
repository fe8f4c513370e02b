"""
In-memory log store fed by the converter's logger.

The buffer is the authoritative log the UI polls: every fetch returns the
whole buffer, and clearing it empties it for all readers.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum


class LogLevel(Enum):
    """Log levels shown in the log console."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def from_levelno(cls, levelno: int) -> LogLevel:
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


@dataclass(frozen=True)
class LogEntry:
    """
    A single log line.

    Attributes:
        timestamp: Whole seconds since the epoch
        level: Severity of the line
        message: Log text
    """

    timestamp: int
    level: LogLevel
    message: str

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> LogEntry:
        return cls(
            timestamp=int(record.created),
            level=LogLevel.from_levelno(record.levelno),
            message=record.getMessage(),
        )


class LogBuffer:
    """
    Thread-safe bounded list of log entries.

    Writers are the converter worker threads; readers are gateway fetches on
    the GUI thread.
    """

    def __init__(self, max_entries: int = 5000) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of all entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class LogBufferHandler(logging.Handler):
    """Logging handler that records INFO and above into a LogBuffer."""

    def __init__(self, buffer: LogBuffer, level: int = logging.INFO) -> None:
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append(LogEntry.from_record(record))
        except Exception:
            self.handleError(record)
