"""
GUI widgets for the Parcel application.
"""

from .log_console import LogConsole
from .notification_manager import NotificationManager
from .status_indicator import StatusIndicatorWidget

__all__ = ["LogConsole", "NotificationManager", "StatusIndicatorWidget"]
