"""Cross-platform file system utilities for GUI operations.

This module provides utilities for opening folders in the native file
manager and for displaying long paths compactly.
"""

import logging
import platform
import re
import subprocess
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

logger = logging.getLogger(__name__)

SHORTEN_THRESHOLD = 50


def open_in_file_manager(path: Path) -> bool:
    """Open a folder in the OS-native file manager.

    Qt's QDesktopServices is tried first, with platform-specific commands
    as a fallback.

    Args:
        path: The directory path to open. Must be an existing directory.

    Returns:
        True if the folder was successfully opened, False otherwise.
    """
    if not path.exists():
        logger.warning(f"Cannot open non-existent path in file manager: {path}")
        return False

    if not path.is_dir():
        logger.warning(f"Cannot open non-directory path in file manager: {path}")
        return False

    abs_path = path.resolve()

    try:
        url = QUrl.fromLocalFile(str(abs_path))
        if QDesktopServices.openUrl(url):
            logger.debug(f"Successfully opened {abs_path} using QDesktopServices")
            return True
        logger.warning(f"QDesktopServices.openUrl returned False for {abs_path}")
    except Exception as e:
        logger.warning(f"QDesktopServices.openUrl failed for {abs_path}: {e}")

    system = platform.system().lower()

    try:
        if system == "windows":
            subprocess.run(["explorer", str(abs_path)], check=False)
            logger.debug(f"Opened {abs_path} using Windows Explorer")
            return True

        elif system == "darwin":
            subprocess.run(["open", str(abs_path)], check=False)
            logger.debug(f"Opened {abs_path} using macOS Finder")
            return True

        elif system == "linux":
            result = subprocess.run(["xdg-open", str(abs_path)], check=False, capture_output=True)
            if result.returncode == 0:
                logger.debug(f"Opened {abs_path} using xdg-open")
                return True
            logger.warning(f"xdg-open failed with return code {result.returncode}")

    except (subprocess.SubprocessError, FileNotFoundError) as e:
        logger.error(f"Platform-specific fallback failed for {abs_path}: {e}")

    return False


def shorten_path(path: str, threshold: int = SHORTEN_THRESHOLD) -> str:
    """Shorten a long path to its first component and last two components.

    Args:
        path: Path text as selected by the user.
        threshold: Paths up to this many characters are returned unchanged.

    Returns:
        The path, or ``first/.../parent/name`` when it is too long.
    """
    if len(path) <= threshold:
        return path

    parts = re.split(r"[\\/]", path)
    if len(parts) <= 3:
        return path
    return parts[0] + "/.../" + "/".join(parts[-2:])
