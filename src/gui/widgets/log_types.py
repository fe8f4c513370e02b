"""
Log entry formatting utilities for the LogConsole widget.
"""

from datetime import datetime

from core.log_buffer import LogEntry, LogLevel

EMPTY_LOG_PLACEHOLDER = "[AWAITING SIGNAL...]"

LEVEL_FILTERS = ["All", "debug", "info", "warn", "error"]


def format_log_entry(entry: LogEntry) -> str:
    """
    Format a log entry for display.

    Args:
        entry: The log entry to format

    Returns:
        ``[hh:mm:ss] level message`` in local time
    """
    time_str = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M:%S")
    return f"[{time_str}] {entry.level.value} {entry.message}"


def should_show_entry(entry: LogEntry, level_filter: str) -> bool:
    """
    Check if an entry should be shown based on the level filter.

    Args:
        entry: The log entry to check
        level_filter: "All" or a LogLevel value

    Returns:
        True if the entry should be shown
    """
    return level_filter == "All" or entry.level == LogLevel(level_filter)
