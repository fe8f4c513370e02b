"""
Centralized error handling system for the Parcel GUI.

This module provides the error taxonomy and custom exception hierarchy used
by the backend gateway, the converter and the orchestration layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    FILE = "file"
    CONVERSION = "conversion"
    SELECTION = "selection"
    SYSTEM = "system"
    CONFIG = "config"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # File-related errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_OPEN_FAILED = "FILE_OPEN_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    DIRECTORY_CREATE_FAILED = "DIRECTORY_CREATE_FAILED"
    OPEN_FOLDER_FAILED = "OPEN_FOLDER_FAILED"

    # Selection errors
    INVALID_FILE_EXTENSION = "INVALID_FILE_EXTENSION"
    DIALOG_FAILED = "DIALOG_FAILED"

    # Conversion errors
    CONVERTER_NOT_FOUND = "CONVERTER_NOT_FOUND"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    TASK_FAILED = "TASK_FAILED"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"

    # System errors
    BACKEND_FAILURE = "BACKEND_FAILURE"
    TIMEOUT = "TIMEOUT"
    MEMORY_ERROR = "MEMORY_ERROR"
    OS_ERROR = "OS_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    The string form is the user-facing message, which is what the
    orchestrator shows in error notifications.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type.value}, code={self.code.value}, message='{self.user_message}')"


class _CategorizedError(BaseAppError):
    """
    Base for errors whose category is fixed by the subclass.

    Subclasses set ``category`` and may change the default severity and
    retriable flag; callers only pass a code and messages.
    """

    category: ClassVar[ErrorType]
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.MEDIUM
    default_retriable: ClassVar[bool] = False

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity | None = None,
        retriable: bool | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=self.category,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity or self.default_severity,
            retriable=self.default_retriable if retriable is None else retriable,
            context=context or {},
        )


class FileError(_CategorizedError):
    """File system related errors."""

    category = ErrorType.FILE


class ConversionError(_CategorizedError):
    """Errors raised while running the external converter."""

    category = ErrorType.CONVERSION
    default_severity = ErrorSeverity.HIGH
    default_retriable = True


class SelectionError(_CategorizedError):
    """Errors raised by the folder and file pickers."""

    category = ErrorType.SELECTION
    default_retriable = True


class BackendError(_CategorizedError):
    category = ErrorType.SYSTEM
    default_severity = ErrorSeverity.HIGH


class ConfigError(_CategorizedError):
    category = ErrorType.CONFIG


# Checked in order; OSError subclasses must come before OSError itself.
_BUILTIN_ERRORS: list[tuple[type[BaseException], type[_CategorizedError], ErrorCode, str]] = [
    (FileNotFoundError, FileError, ErrorCode.FILE_NOT_FOUND, "File not found"),
    (PermissionError, FileError, ErrorCode.PERMISSION_DENIED, "Permission denied"),
    (TimeoutError, BackendError, ErrorCode.TIMEOUT, "Operation timed out"),
    (MemoryError, BackendError, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
    (OSError, BackendError, ErrorCode.OS_ERROR, "System error occurred"),
]


def map_exception(exc: BaseException, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Wrap an arbitrary exception in the application error hierarchy.

    Application errors pass through untouched. Known built-in exceptions get
    a dedicated code; anything else becomes an UNKNOWN backend error that
    keeps the original text.
    """
    if isinstance(exc, BaseAppError):
        return exc

    technical = f"{type(exc).__name__}: {exc}"
    text = str(exc)

    for builtin, error_class, code, fallback in _BUILTIN_ERRORS:
        if isinstance(exc, builtin):
            return error_class(code=code, user_message=text or fallback, technical_message=technical, context=context)

    logger.warning(f"Unknown exception type: {technical}")
    return BackendError(
        code=ErrorCode.UNKNOWN,
        user_message=text or "An unexpected error occurred",
        technical_message=technical,
        context=context,
    )


from_exception = map_exception
