"""
Main entry point for the Parcel GUI application.
"""

import sys

from PySide6.QtWidgets import QApplication

from core.config import setup_qsettings
from core.config_manager import ConfigManager
from core.error_handler import init_logging, setup_error_handling
from gui.main_window import MainWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)

    # Identifiers must be set before anything touches QSettings
    setup_qsettings()

    config_manager = ConfigManager()
    init_logging(config_manager.get("log_level"))
    error_handler = setup_error_handling()

    window = MainWindow(config_manager=config_manager)
    error_handler.errorOccurred.connect(window.notification_manager.show_error)
    window.show()

    try:
        return app.exec()
    finally:
        error_handler.restore_hooks()


if __name__ == "__main__":
    raise SystemExit(main())
