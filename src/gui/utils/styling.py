"""
Shared styling utilities for the Parcel GUI application.

This module contains the colour palette, stylesheets and text formats used
by the main window, the status indicator and the log console.
"""

from PySide6.QtGui import QColor, QFont, QFontDatabase, QTextCharFormat

from core.conversion_state import StatusKind
from core.log_buffer import LogLevel


class TerminalPalette:
    """
    Centralized colour palette for the terminal-style theme.

    Text colours keep at least a 4.5:1 contrast ratio against BACKGROUND.
    """

    BACKGROUND = "#0b0f0c"
    SURFACE = "#121a14"
    BORDER = "#1f3a26"
    BORDER_FOCUS = "#39ff88"

    TEXT_PRIMARY = "#c8f7d4"
    TEXT_SECONDARY = "#7fa88a"
    TEXT_DISABLED = "#44584a"

    ACCENT = "#39ff88"
    ACCENT_PRESSED = "#22c766"

    # Log level colours
    LOG_DEBUG_TEXT = "#7fa88a"
    LOG_INFO_TEXT = "#c8f7d4"
    LOG_WARN_TEXT = "#ffd166"
    LOG_ERROR_TEXT = "#ff6b6b"

    # Status indicator colours
    STATUS_WAITING_COLOR = "#7fa88a"
    STATUS_READY_COLOR = "#39ff88"
    STATUS_PROCESSING_COLOR = "#ffd166"
    STATUS_SUCCEEDED_COLOR = "#39ff88"
    STATUS_FAILED_COLOR = "#ff6b6b"


class StyleSheets:
    """Collection of reusable stylesheet definitions using the terminal palette."""

    @staticmethod
    def get_window_style() -> str:
        """Get the base stylesheet for the main window."""
        return f"""
            QMainWindow, QWidget#centralWidget {{
                background-color: {TerminalPalette.BACKGROUND};
                color: {TerminalPalette.TEXT_PRIMARY};
            }}

            QFrame#card {{
                background-color: {TerminalPalette.SURFACE};
                border: 1px solid {TerminalPalette.BORDER};
                border-radius: 4px;
            }}

            QLabel#cardTitle {{
                color: {TerminalPalette.TEXT_SECONDARY};
                font-weight: bold;
                letter-spacing: 1px;
            }}

            QLabel#cardValue {{
                color: {TerminalPalette.TEXT_SECONDARY};
            }}

            QLabel#cardValue[selected="true"] {{
                color: {TerminalPalette.ACCENT};
            }}

            QProgressBar {{
                background-color: {TerminalPalette.BACKGROUND};
                border: 1px solid {TerminalPalette.BORDER};
                max-height: 6px;
            }}

            QProgressBar::chunk {{
                background-color: {TerminalPalette.ACCENT};
            }}
        """

    @staticmethod
    def get_log_console_style() -> str:
        """Get stylesheet for the log console text edit."""
        font = get_monospace_font()

        return f"""
            QTextEdit#logTextEdit {{
                background-color: {TerminalPalette.BACKGROUND};
                border: 1px solid {TerminalPalette.BORDER};
                border-radius: 4px;
                font-family: '{font.family()}';
                font-size: {font.pointSize()}pt;
                color: {TerminalPalette.TEXT_PRIMARY};
            }}

            QTextEdit#logTextEdit:focus {{
                border: 2px solid {TerminalPalette.BORDER_FOCUS};
            }}
        """

    @staticmethod
    def get_button_style(button_type: str = "primary") -> str:
        """Get button stylesheet for the given type."""
        if button_type == "primary":
            background, text, border = TerminalPalette.ACCENT, TerminalPalette.BACKGROUND, TerminalPalette.ACCENT
        else:  # secondary
            background, text, border = TerminalPalette.SURFACE, TerminalPalette.ACCENT, TerminalPalette.BORDER

        return f"""
            QPushButton {{
                background-color: {background};
                color: {text};
                border: 2px solid {border};
                border-radius: 4px;
                padding: 8px 16px;
                font-weight: bold;
                min-height: 20px;
            }}

            QPushButton:pressed {{
                background-color: {TerminalPalette.ACCENT_PRESSED};
                color: {TerminalPalette.BACKGROUND};
            }}

            QPushButton:disabled {{
                background-color: {TerminalPalette.SURFACE};
                color: {TerminalPalette.TEXT_DISABLED};
                border-color: {TerminalPalette.BORDER};
            }}

            QPushButton:focus {{
                outline: 2px solid {TerminalPalette.BORDER_FOCUS};
            }}
        """


def get_monospace_font() -> QFont:
    """
    Get a monospace font suitable for log display.

    Returns:
        QFont configured for readability
    """
    font = QFont()

    families = QFontDatabase.families(QFontDatabase.WritingSystem.Latin)
    preferred_fonts = ["SF Mono", "Consolas", "Ubuntu Mono", "DejaVu Sans Mono", "Courier New"]

    selected_family = next((name for name in preferred_fonts if name in families), "monospace")

    font.setFamily(selected_family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPointSize(11)

    return font


_LOG_LEVEL_COLORS = {
    LogLevel.DEBUG: TerminalPalette.LOG_DEBUG_TEXT,
    LogLevel.INFO: TerminalPalette.LOG_INFO_TEXT,
    LogLevel.WARN: TerminalPalette.LOG_WARN_TEXT,
    LogLevel.ERROR: TerminalPalette.LOG_ERROR_TEXT,
}


def get_log_text_format(level: LogLevel) -> QTextCharFormat:
    """
    Get QTextCharFormat for a log level.

    Warnings and errors are bold.
    """
    text_format = QTextCharFormat()
    text_format.setForeground(QColor(_LOG_LEVEL_COLORS.get(level, TerminalPalette.LOG_INFO_TEXT)))

    font = get_monospace_font()
    font.setBold(level in (LogLevel.WARN, LogLevel.ERROR))
    text_format.setFont(font)

    return text_format


def get_status_indicator_color(kind: StatusKind) -> str:
    """
    Get colour for the status indicator dot.

    Args:
        kind: Current status kind

    Returns:
        Colour hex string
    """
    status_colors = {
        StatusKind.READY: TerminalPalette.STATUS_READY_COLOR,
        StatusKind.PROCESSING: TerminalPalette.STATUS_PROCESSING_COLOR,
        StatusKind.SUCCEEDED: TerminalPalette.STATUS_SUCCEEDED_COLOR,
        StatusKind.FAILED: TerminalPalette.STATUS_FAILED_COLOR,
    }
    return status_colors.get(kind, TerminalPalette.STATUS_WAITING_COLOR)
