"""
Notification management for the Parcel GUI.

This module shows conversion outcomes, selection errors and unexpected
application errors either as message boxes (when the window is active) or
as system tray messages (when it is minimized or in the background).
"""

import logging
import sys

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QAbstractButton, QApplication, QMessageBox, QSystemTrayIcon, QWidget

from core.errors import BaseAppError
from core.orchestrator import Notification


class NotificationManager(QObject):
    """
    Shows orchestrator notifications to the user.

    Message boxes are opened window-modal without blocking the event loop,
    so log polling and the conversion keep running while one is visible.

    Signals:
        dismissed(): The user closed the current notification
        openFolderRequested(): The user chose "Open Folder"
    """

    dismissed = Signal()
    openFolderRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._parent_widget = parent
        self._logger = logging.getLogger(__name__)

        self._system_tray: QSystemTrayIcon | None = None
        self._tray_available = False
        self._message_box: QMessageBox | None = None
        self._open_folder_button: QAbstractButton | None = None
        self._pending_tray_output: str | None = None

        self._test_mode = self._detect_test_mode()
        if not self._test_mode:
            self._init_system_tray()

    def _init_system_tray(self) -> None:
        """Initialize system tray icon if available."""
        if not QSystemTrayIcon.isSystemTrayAvailable():
            self._logger.debug("System tray not available")
            return

        self._system_tray = QSystemTrayIcon(self)
        app_instance = QApplication.instance()
        if isinstance(app_instance, QApplication) and not app_instance.windowIcon().isNull():
            self._system_tray.setIcon(app_instance.windowIcon())
        self._system_tray.setToolTip("Parcel")
        self._system_tray.messageClicked.connect(self._on_tray_message_clicked)
        self._system_tray.show()
        self._tray_available = True

    def _detect_test_mode(self) -> bool:
        """Detect if we're running under a test runner."""
        return "pytest" in sys.modules or hasattr(sys, "_called_from_test")

    def is_showing(self) -> bool:
        return self._message_box is not None

    def show_notification(self, notification: Notification) -> None:
        """
        Show a notification to the user.

        Args:
            notification: Outcome or error raised by the orchestrator
        """
        self.close_current()

        if self._test_mode:
            self._logger.info(
                f"TEST NOTIFICATION [{notification.status}] {notification.title}: {notification.message} "
                f"(output_path={notification.output_path})"
            )
            return

        if self._should_use_system_tray():
            self._show_tray_notification(notification)
        else:
            self._show_message_box(notification)

    @Slot(object)
    def show_error(self, error: BaseAppError) -> None:
        """Show an error reported by the application error handler."""
        self.show_notification(Notification(status="error", title="Unexpected Error", message=str(error)))

    def close_current(self) -> None:
        """Close a visible message box without reporting a dismissal."""
        if self._message_box is None:
            return
        message_box, self._message_box = self._message_box, None
        message_box.finished.disconnect(self._on_message_box_finished)
        message_box.close()
        message_box.deleteLater()

    def _should_use_system_tray(self) -> bool:
        if not self._tray_available or not self._system_tray:
            return False
        if self._parent_widget:
            return self._parent_widget.isMinimized() or not self._parent_widget.isActiveWindow()
        return False

    def _show_message_box(self, notification: Notification) -> None:
        msg_box = QMessageBox(self._parent_widget)
        msg_box.setWindowTitle(notification.title)
        msg_box.setText(notification.message)
        is_error = notification.status == "error"
        msg_box.setIcon(QMessageBox.Icon.Critical if is_error else QMessageBox.Icon.Information)

        ok_button = msg_box.addButton(QMessageBox.StandardButton.Ok)
        msg_box.setDefaultButton(ok_button)

        self._open_folder_button = None
        if notification.output_path:
            self._open_folder_button = msg_box.addButton("Open Folder", QMessageBox.ButtonRole.ActionRole)

        self._message_box = msg_box
        msg_box.finished.connect(self._on_message_box_finished)
        msg_box.open()

    def _on_message_box_finished(self, _result: int) -> None:
        msg_box, self._message_box = self._message_box, None
        if msg_box is None:
            return

        open_folder = self._open_folder_button is not None and msg_box.clickedButton() == self._open_folder_button
        self._open_folder_button = None
        msg_box.deleteLater()

        if open_folder:
            self.openFolderRequested.emit()
        else:
            self.dismissed.emit()

    def _show_tray_notification(self, notification: Notification) -> None:
        if not self._system_tray:
            self._show_message_box(notification)
            return

        is_error = notification.status == "error"
        icon = QSystemTrayIcon.MessageIcon.Critical if is_error else QSystemTrayIcon.MessageIcon.Information

        message = notification.message
        if notification.output_path:
            message += "\nClick to open folder"
        self._pending_tray_output = notification.output_path

        self._system_tray.showMessage(notification.title, message, icon, 5000)
        # Tray messages cannot be acknowledged; they are dismissed once shown
        self.dismissed.emit()

    def _on_tray_message_clicked(self) -> None:
        if self._pending_tray_output:
            self.openFolderRequested.emit()

    def cleanup(self) -> None:
        """Clean up resources."""
        self.close_current()
        if self._system_tray:
            self._system_tray.hide()
            self._system_tray = None
