"""
Status indicator widget for the main window.

Shows a coloured dot and the status text of the current ConversionStatus.
"""

from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from core.conversion_state import ConversionStatus, StatusKind
from gui.utils.styling import TerminalPalette, get_status_indicator_color

_DESCRIPTIONS = {
    StatusKind.IDLE: "Starting up",
    StatusKind.AWAITING_FOLDER: "Choose the folder the converted project is written to",
    StatusKind.AWAITING_FILE: "Choose the place file to convert",
    StatusKind.READY: "Ready to convert",
    StatusKind.PROCESSING: "Conversion in progress",
    StatusKind.SUCCEEDED: "Conversion completed successfully",
    StatusKind.FAILED: "Conversion failed",
}


class StatusIndicatorWidget(QWidget):
    """
    Widget for displaying the current conversion status.

    Shows a coloured dot and status text with accessibility support.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._current_status = ConversionStatus.idle()
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setObjectName("statusIndicator")
        self.setAccessibleName("Conversion status")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.status_dot = QLabel()
        self.status_dot.setFixedSize(12, 12)
        self.status_dot.setAccessibleName("Status indicator dot")
        layout.addWidget(self.status_dot)

        self.status_text = QLabel()
        self.status_text.setObjectName("statusText")
        self.status_text.setAccessibleName("Status text")
        layout.addWidget(self.status_text)
        layout.addStretch()

        self.set_status(self._current_status)

    def set_status(self, status: ConversionStatus) -> None:
        """
        Show a conversion status.

        Args:
            status: The new status
        """
        self._current_status = status
        color = get_status_indicator_color(status.kind)

        self.status_dot.setStyleSheet(
            f"""
            QLabel {{
                border-radius: 6px;
                background-color: {color};
                border: 1px solid {TerminalPalette.BORDER};
            }}
        """
        )
        self.status_text.setStyleSheet(f"QLabel {{ color: {color}; font-weight: bold; }}")
        self.status_text.setText(status.display_text)

        description = status.message or _DESCRIPTIONS[status.kind]
        self.status_dot.setAccessibleDescription(f"Status: {status.display_text}")
        self.status_text.setAccessibleDescription(description)
        self.setToolTip(f"{status.display_text}: {description}")

    def get_status(self) -> ConversionStatus:
        """Get the displayed status."""
        return self._current_status
