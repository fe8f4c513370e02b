"""
Shared pytest configuration.
"""

import os

import pytest
from PySide6.QtCore import QCoreApplication, QSettings, QStandardPaths

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Keep application data such as the rotating error log out of the user profile
QStandardPaths.setTestModeEnabled(True)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """Point every QSettings() at a throwaway INI file."""
    QCoreApplication.setOrganizationName("ParcelTests")
    QCoreApplication.setApplicationName("ParcelGUITests")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, str(tmp_path / "settings"))
    yield
    QSettings().clear()
