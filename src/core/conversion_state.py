"""
Conversion state management for the Parcel GUI.

This module defines the selection state and the conversion status used
throughout the application to keep the UI and the orchestration layer in
agreement about what the user can do next.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class StatusKind(Enum):
    """
    Enumeration of conversion status kinds.

    Each kind carries the text shown by the status indicator.
    """

    IDLE = "IDLE"
    AWAITING_FOLDER = "SELECT OUTPUT FOLDER..."
    AWAITING_FILE = "SELECT INPUT FILE..."
    READY = "READY TO CONVERT"
    PROCESSING = "PROCESSING..."
    SUCCEEDED = "CONVERSION COMPLETE"
    FAILED = "CONVERSION FAILED"

    @property
    def display_text(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self in (StatusKind.SUCCEEDED, StatusKind.FAILED)


@dataclass(frozen=True)
class ConversionStatus:
    """
    Current status of the conversion workflow.

    Only SUCCEEDED carries an output path; SUCCEEDED and FAILED carry the
    message produced by the conversion call.
    """

    kind: StatusKind
    message: str | None = None
    output_path: str | None = None

    @classmethod
    def idle(cls) -> ConversionStatus:
        return cls(StatusKind.IDLE)

    @classmethod
    def succeeded(cls, output_path: str, message: str) -> ConversionStatus:
        return cls(StatusKind.SUCCEEDED, message=message, output_path=output_path)

    @classmethod
    def failed(cls, message: str) -> ConversionStatus:
        return cls(StatusKind.FAILED, message=message)

    @property
    def display_text(self) -> str:
        return self.kind.display_text


@dataclass(frozen=True)
class SelectionState:
    """
    Paths chosen by the user.

    Attributes:
        output_folder: Folder the converted project is written into
        input_file: Place file to convert
    """

    output_folder: str | None = None
    input_file: str | None = None

    @property
    def can_select_input_file(self) -> bool:
        """Whether the input file control should be enabled."""
        return bool(self.output_folder)

    def can_run_conversion(self, is_converting: bool) -> bool:
        """Whether a conversion may be started right now."""
        return bool(self.output_folder) and bool(self.input_file) and not is_converting

    def with_output_folder(self, path: str) -> SelectionState:
        return replace(self, output_folder=path)

    def with_input_file(self, path: str) -> SelectionState:
        return replace(self, input_file=path)


def derive_status(
    selection: SelectionState,
    is_converting: bool,
    last_outcome: ConversionStatus | None = None,
) -> ConversionStatus:
    """
    Compute the conversion status from the orchestration state.

    Args:
        selection: Current path selection
        is_converting: Whether a conversion call is in flight
        last_outcome: Terminal status of the last finished conversion, if it
            has not been superseded yet

    Returns:
        The status to display
    """
    if not selection.output_folder:
        return ConversionStatus(StatusKind.AWAITING_FOLDER)
    if not selection.input_file:
        return ConversionStatus(StatusKind.AWAITING_FILE)
    if is_converting:
        return ConversionStatus(StatusKind.PROCESSING)
    if last_outcome is not None and last_outcome.kind.is_terminal:
        return last_outcome
    return ConversionStatus(StatusKind.READY)
