"""
Tests for MainWindow rendering and command forwarding.
"""

import pytest

from core.backend_interface import ConversionResult
from core.conversion_state import StatusKind
from core.log_buffer import LogEntry, LogLevel
from core.orchestrator import ConversionOrchestrator
from gui.main_window import MainWindow
from gui.widgets.main_window_ui import CONVERT_BUTTON_TEXT, CONVERTING_BUTTON_TEXT, NOT_SELECTED_TEXT

LONG_FOLDER = "/home/developer/projects/roblox/experiences/obby/builds/release"


@pytest.fixture
def window(qtbot, gateway):
    orchestrator = ConversionOrchestrator(gateway, idle_poll_ms=60000, active_poll_ms=30000)
    main_window = MainWindow(orchestrator=orchestrator)
    qtbot.addWidget(main_window)
    yield main_window
    orchestrator.log_sync.stop()


def _select(window, gateway, qtbot, folder="/out", file="/in/game.rbxl"):
    window.ui.select_folder_button.click()
    qtbot.waitUntil(lambda: gateway.count("select_output_folder") == 1)
    gateway.last("select_output_folder").resolve(folder)

    window.ui.select_file_button.click()
    qtbot.waitUntil(lambda: gateway.count("select_input_file") == 1)
    gateway.last("select_input_file").resolve(file)


class TestInitialRender:
    def test_started_orchestrator(self, window):
        assert window.orchestrator.status.kind is StatusKind.AWAITING_FOLDER
        assert window.ui.status_indicator.status_text.text() == "SELECT OUTPUT FOLDER..."

    def test_controls_disabled_until_paths_selected(self, window):
        assert window.ui.select_folder_button.isEnabled()
        assert not window.ui.select_file_button.isEnabled()
        assert not window.ui.convert_button.isEnabled()
        assert window.ui.folder_label.text() == NOT_SELECTED_TEXT
        assert window.ui.file_label.text() == NOT_SELECTED_TEXT
        assert window.ui.progress_bar.isHidden()


class TestSelection:
    def test_folder_then_file(self, window, gateway, qtbot):
        _select(window, gateway, qtbot, folder=LONG_FOLDER)

        assert window.ui.folder_label.text() == "/.../builds/release"
        assert window.ui.folder_label.toolTip() == LONG_FOLDER
        assert window.ui.file_label.text() == "/in/game.rbxl"
        assert window.ui.select_file_button.isEnabled()
        assert window.ui.convert_button.isEnabled()
        assert window.ui.status_indicator.status_text.text() == "READY TO CONVERT"


class TestConversion:
    def test_conversion_round_trip(self, window, gateway, qtbot):
        _select(window, gateway, qtbot)

        window.ui.convert_button.click()
        qtbot.waitUntil(lambda: gateway.count("fetch_logs") == 1)

        assert not window.ui.convert_button.isEnabled()
        assert window.ui.convert_button.text() == CONVERTING_BUTTON_TEXT
        assert not window.ui.progress_bar.isHidden()
        assert window.ui.status_indicator.status_text.text() == "PROCESSING..."

        gateway.last("fetch_logs").resolve([LogEntry(1700000000, LogLevel.INFO, "Starting conversion...")])
        assert window.ui.log_console.get_entry_count() == 1

        gateway.last("run_conversion").resolve(ConversionResult("/out/game", "Successfully converted to /out/game"))
        gateway.last("fetch_logs").resolve([])

        assert window.ui.convert_button.isEnabled()
        assert window.ui.convert_button.text() == CONVERT_BUTTON_TEXT
        assert window.ui.progress_bar.isHidden()
        assert window.ui.status_indicator.status_text.text() == "CONVERSION COMPLETE"

    def test_clear_button_submits_clear(self, window, gateway, qtbot):
        window.ui.log_console.clear_button.click()
        qtbot.waitUntil(lambda: gateway.count("clear_logs") == 1)


class TestLifecycle:
    def test_close_shuts_down_backend(self, window, gateway):
        window.show()
        window.close()

        assert gateway.shutdown_called
        assert not window.orchestrator.log_sync.is_active()
