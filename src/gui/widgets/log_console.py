"""
LogConsole widget for displaying the polled backend log.

The console always shows a complete snapshot: each call to render_entries()
replaces everything previously shown.
"""

from PySide6.QtCore import QSettings, Signal
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from core.log_buffer import LogEntry
from gui.utils.styling import StyleSheets, get_log_text_format
from gui.widgets.log_types import EMPTY_LOG_PLACEHOLDER, LEVEL_FILTERS, format_log_entry, should_show_entry


class LogConsole(QWidget):
    """
    A console widget for displaying formatted log snapshots.

    Features:
    - Level-based formatting
    - Timestamped entries
    - Level filter persisted in QSettings
    - Auto-scroll to the newest entry, toggled from the toolbar
    """

    clearRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._entries: list[LogEntry] = []
        self._level_filter = "All"

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        controls = QHBoxLayout()
        title = QLabel("SYSTEM LOG")
        title.setObjectName("cardTitle")
        controls.addWidget(title)

        self._count_label = QLabel("0 LINES")
        self._count_label.setObjectName("logCount")
        self._count_label.setAccessibleName("Log line count")
        controls.addWidget(self._count_label)
        controls.addStretch()

        self._filter_combo = QComboBox()
        self._filter_combo.addItems(LEVEL_FILTERS)
        self._filter_combo.setAccessibleName("Log level filter")
        # Connected after addItems so populating the combo does not overwrite the saved filter
        self._filter_combo.currentTextChanged.connect(self._on_level_filter_changed)
        controls.addWidget(self._filter_combo)

        self._auto_scroll_checkbox = QCheckBox("AUTO-SCROLL")
        self._auto_scroll_checkbox.setAccessibleName("Auto-scroll toggle")
        self._auto_scroll_checkbox.setToolTip("Keep the newest log line in view")
        self._auto_scroll_checkbox.setChecked(True)
        self._auto_scroll_checkbox.toggled.connect(self._on_auto_scroll_toggled)
        controls.addWidget(self._auto_scroll_checkbox)

        self.clear_button = QPushButton("CLEAR")
        self.clear_button.setAccessibleName("Clear log")
        self.clear_button.setStyleSheet(StyleSheets.get_button_style("secondary"))
        self.clear_button.clicked.connect(self.clearRequested)
        controls.addWidget(self.clear_button)

        layout.addLayout(controls)

        self._text_edit = QTextEdit()
        self._text_edit.setObjectName("logTextEdit")
        self._text_edit.setReadOnly(True)
        self._text_edit.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
        self._text_edit.setAccessibleName("Log console")
        self._text_edit.setAccessibleDescription("Console displaying converter log messages with timestamps and levels")
        self._text_edit.setStyleSheet(StyleSheets.get_log_console_style())
        self._text_edit.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout.addWidget(self._text_edit)

        self._refresh_display()

    def _load_settings(self) -> None:
        """Load settings from QSettings."""
        settings = QSettings()

        level_filter = settings.value("ui/logConsole/levelFilter", "All")
        if isinstance(level_filter, str) and level_filter in LEVEL_FILTERS:
            self._filter_combo.setCurrentText(level_filter)

        self._auto_scroll_checkbox.setChecked(settings.value("ui/logConsole/autoScrollEnabled", True, type=bool))

    def render_entries(self, entries: list[LogEntry]) -> None:
        """
        Replace the displayed log with a new snapshot.

        Args:
            entries: Entries in the order returned by the backend
        """
        self._entries = list(entries)
        self._refresh_display()
        self._count_label.setText(f"{self.get_entry_count()} LINES")

    def get_entry_count(self) -> int:
        return len(self._entries)

    def scroll_to_bottom(self) -> None:
        """Scroll to the bottom of the log."""
        self._text_edit.moveCursor(QTextCursor.MoveOperation.End)
        self._text_edit.ensureCursorVisible()

    def is_auto_scroll_enabled(self) -> bool:
        return self._auto_scroll_checkbox.isChecked()

    def _on_auto_scroll_toggled(self, enabled: bool) -> None:
        QSettings().setValue("ui/logConsole/autoScrollEnabled", enabled)
        if enabled:
            self.scroll_to_bottom()

    def _on_level_filter_changed(self, level: str) -> None:
        self._level_filter = level
        QSettings().setValue("ui/logConsole/levelFilter", level)
        self._refresh_display()

    def _refresh_display(self) -> None:
        """Redraw the text edit from the current snapshot and filter."""
        visible = [entry for entry in self._entries if should_show_entry(entry, self._level_filter)]

        self._text_edit.setUpdatesEnabled(False)
        try:
            self._text_edit.clear()
            cursor = self._text_edit.textCursor()
            cursor.beginEditBlock()
            if not visible:
                cursor.insertText(EMPTY_LOG_PLACEHOLDER)
            for index, entry in enumerate(visible):
                suffix = "\n" if index < len(visible) - 1 else ""
                cursor.insertText(format_log_entry(entry) + suffix, get_log_text_format(entry.level))
            cursor.endEditBlock()
        finally:
            self._text_edit.setUpdatesEnabled(True)

        if self.is_auto_scroll_enabled():
            self.scroll_to_bottom()
