"""
Main window for the Parcel GUI application.

The window only renders orchestrator state and forwards user actions as
commands; all workflow decisions live in ConversionOrchestrator.
"""

import logging

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QWidget

from core.config_manager import ConfigManager
from core.conversion_state import ConversionStatus, SelectionState, StatusKind
from core.orchestrator import Command, ConversionOrchestrator, Notification
from gui.local_gateway import LocalBackendGateway
from gui.utils.fs import shorten_path
from gui.widgets.main_window_ui import (
    CONVERT_BUTTON_TEXT,
    CONVERTING_BUTTON_TEXT,
    NOT_SELECTED_TEXT,
    MainWindowUI,
)
from gui.widgets.notification_manager import NotificationManager

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window.

    Provides the primary user interface for converting place files.
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator | None = None,
        config_manager: ConfigManager | None = None,
        parent: QWidget | None = None,
    ) -> None:
        """
        Initialize the main window.

        Args:
            orchestrator: Orchestrator to drive; a local one is built when omitted
            config_manager: Configuration used to build the local orchestrator
            parent: Parent widget
        """
        super().__init__(parent)

        if orchestrator is None:
            self.config_manager = config_manager or ConfigManager()
            gateway = LocalBackendGateway(self.config_manager, dialog_parent=self)
            idle_ms, active_ms = self.config_manager.poll_intervals()
            orchestrator = ConversionOrchestrator(gateway, idle_poll_ms=idle_ms, active_poll_ms=active_ms, parent=self)
        else:
            self.config_manager = config_manager
        self.orchestrator = orchestrator

        self.ui = MainWindowUI(self)
        self.ui.setup_ui()

        self.notification_manager = NotificationManager(self)

        self._connect_signals()

        self._render_selection(self.orchestrator.selection)
        self._render_status(self.orchestrator.status)
        self.ui.log_console.render_entries(self.orchestrator.log_sync.snapshot)

        self.orchestrator.start()

    def _connect_signals(self) -> None:
        """Connect UI signals to commands and orchestrator signals to renderers."""
        self.ui.select_folder_button.clicked.connect(lambda: self.orchestrator.submit(Command.SELECT_OUTPUT_FOLDER))
        self.ui.select_file_button.clicked.connect(lambda: self.orchestrator.submit(Command.SELECT_INPUT_FILE))
        self.ui.convert_button.clicked.connect(lambda: self.orchestrator.submit(Command.RUN_CONVERSION))
        self.ui.log_console.clearRequested.connect(lambda: self.orchestrator.submit(Command.CLEAR_LOGS))

        self.notification_manager.dismissed.connect(lambda: self.orchestrator.submit(Command.DISMISS_NOTIFICATION))
        self.notification_manager.openFolderRequested.connect(
            lambda: self.orchestrator.submit(Command.OPEN_OUTPUT_FOLDER)
        )

        self.orchestrator.selectionChanged.connect(self._render_selection)
        self.orchestrator.statusChanged.connect(self._render_status)
        self.orchestrator.convertingChanged.connect(self._on_converting_changed)
        self.orchestrator.notificationRaised.connect(self._on_notification_raised)
        self.orchestrator.notificationDismissed.connect(self.notification_manager.close_current)
        self.orchestrator.log_sync.snapshotChanged.connect(self.ui.log_console.render_entries)

    def _render_selection(self, selection: SelectionState) -> None:
        self._render_path(self.ui.folder_label, selection.output_folder)
        self._render_path(self.ui.file_label, selection.input_file)
        self.ui.select_file_button.setEnabled(selection.can_select_input_file)
        self._render_convert_button()

    def _render_path(self, label: QLabel, path: str | None) -> None:
        label.setText(shorten_path(path) if path else NOT_SELECTED_TEXT)
        label.setToolTip(path or "")
        label.setProperty("selected", bool(path))
        # Re-polish so the [selected] style selector is re-evaluated
        label.style().unpolish(label)
        label.style().polish(label)

    def _render_status(self, status: ConversionStatus) -> None:
        self.ui.status_indicator.set_status(status)
        self.ui.progress_bar.setVisible(status.kind is StatusKind.PROCESSING)
        self._render_convert_button()

    def _render_convert_button(self) -> None:
        converting = self.orchestrator.is_converting
        self.ui.convert_button.setEnabled(self.orchestrator.can_run_conversion)
        self.ui.convert_button.setText(CONVERTING_BUTTON_TEXT if converting else CONVERT_BUTTON_TEXT)

    def _on_converting_changed(self, _converting: bool) -> None:
        self._render_convert_button()

    def _on_notification_raised(self, notification: Notification) -> None:
        logger.debug(f"Showing notification: {notification.title}")
        self.notification_manager.show_notification(notification)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event."""
        self.ui.save_ui_settings()
        self.notification_manager.cleanup()
        self.orchestrator.shutdown()
        super().closeEvent(event)
