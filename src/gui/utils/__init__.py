"""
GUI-specific utilities for the Parcel application.

This module contains utility functions and classes that are specific
to the GUI implementation.
"""

from .fs import open_in_file_manager, shorten_path
from .styling import StyleSheets, TerminalPalette, get_log_text_format, get_status_indicator_color

__all__ = [
    "StyleSheets",
    "TerminalPalette",
    "get_log_text_format",
    "get_status_indicator_color",
    "open_in_file_manager",
    "shorten_path",
]
