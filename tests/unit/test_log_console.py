"""
Tests for the LogConsole widget and log formatting helpers.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from PySide6.QtCore import QSettings

from core.log_buffer import LogEntry, LogLevel
from gui.widgets.log_console import LogConsole
from gui.widgets.log_types import EMPTY_LOG_PLACEHOLDER, format_log_entry, should_show_entry

TS = 1700000000


def _time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


def _shown(console: LogConsole) -> str:
    return console._text_edit.toPlainText()


@pytest.fixture
def console(qtbot):
    widget = LogConsole()
    qtbot.addWidget(widget)
    return widget


class TestFormatting:
    def test_format_log_entry(self):
        entry = LogEntry(TS, LogLevel.WARN, "Output folder already exists")
        assert format_log_entry(entry) == f"[{_time(TS)}] warn Output folder already exists"

    def test_should_show_entry(self):
        entry = LogEntry(TS, LogLevel.ERROR, "boom")
        assert should_show_entry(entry, "All")
        assert should_show_entry(entry, "error")
        assert not should_show_entry(entry, "info")


class TestLogConsole:
    def test_empty_console_shows_placeholder(self, console):
        assert _shown(console) == EMPTY_LOG_PLACEHOLDER
        assert console.get_entry_count() == 0
        assert console._count_label.text() == "0 LINES"

    def test_render_entries_in_order(self, console):
        console.render_entries(
            [
                LogEntry(TS, LogLevel.INFO, "Starting conversion..."),
                LogEntry(TS + 1, LogLevel.INFO, "Opening place file..."),
            ]
        )

        assert _shown(console).splitlines() == [
            f"[{_time(TS)}] info Starting conversion...",
            f"[{_time(TS + 1)}] info Opening place file...",
        ]
        assert console._count_label.text() == "2 LINES"

    def test_render_replaces_previous_snapshot(self, console):
        console.render_entries([LogEntry(TS, LogLevel.INFO, "a"), LogEntry(TS, LogLevel.INFO, "b")])
        console.render_entries([LogEntry(TS, LogLevel.INFO, "c")])

        assert console.get_entry_count() == 1
        assert _shown(console) == f"[{_time(TS)}] info c"

    def test_empty_snapshot_restores_placeholder(self, console):
        console.render_entries([LogEntry(TS, LogLevel.INFO, "a")])
        console.render_entries([])

        assert _shown(console) == EMPTY_LOG_PLACEHOLDER
        assert console._count_label.text() == "0 LINES"

    def test_clear_button_requests_clear(self, console, qtbot):
        console.render_entries([LogEntry(TS, LogLevel.INFO, "a")])

        with qtbot.waitSignal(console.clearRequested):
            console.clear_button.click()

        # The console waits for the new snapshot instead of clearing itself
        assert console.get_entry_count() == 1

    def test_level_filter(self, console):
        console.render_entries(
            [
                LogEntry(TS, LogLevel.INFO, "Starting conversion..."),
                LogEntry(TS, LogLevel.ERROR, "Conversion task failed: x"),
            ]
        )

        console._filter_combo.setCurrentText("error")

        assert _shown(console) == f"[{_time(TS)}] error Conversion task failed: x"
        assert console.get_entry_count() == 2

    def test_filter_without_matches_shows_placeholder(self, console):
        console.render_entries([LogEntry(TS, LogLevel.INFO, "only info")])
        console._filter_combo.setCurrentText("warn")

        assert _shown(console) == EMPTY_LOG_PLACEHOLDER

    def test_filter_is_persisted(self, console, qtbot):
        console._filter_combo.setCurrentText("warn")

        assert QSettings().value("ui/logConsole/levelFilter") == "warn"

        restored = LogConsole()
        qtbot.addWidget(restored)
        assert restored._filter_combo.currentText() == "warn"


class TestAutoScroll:
    def test_enabled_by_default(self, console):
        assert console.is_auto_scroll_enabled()
        assert console._auto_scroll_checkbox.isChecked()

    def test_toggle_is_persisted(self, console, qtbot):
        console._auto_scroll_checkbox.click()

        assert not console.is_auto_scroll_enabled()
        assert QSettings().value("ui/logConsole/autoScrollEnabled", type=bool) is False

        restored = LogConsole()
        qtbot.addWidget(restored)
        assert not restored.is_auto_scroll_enabled()

    def test_new_snapshot_scrolls_only_when_enabled(self, console):
        entries = [LogEntry(TS + i, LogLevel.INFO, f"line {i}") for i in range(200)]

        with patch.object(console, "scroll_to_bottom") as scroll:
            console.render_entries(entries)
            assert scroll.call_count == 1

            console._auto_scroll_checkbox.click()
            console.render_entries(entries)
            assert scroll.call_count == 1
