"""
Configuration manager for the Parcel GUI.

Provides QSettings-backed configuration management with default fallbacks
and type safety.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, parse_extensions, setup_qsettings, validate_config
from .errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Provides type-safe access to configuration values with automatic
    fallback to defaults when keys are missing or have invalid types.
    """

    def __init__(self) -> None:
        """Initialize the ConfigManager with QSettings."""
        # Ensure QSettings is configured with app identifiers
        setup_qsettings()

        self._settings = QSettings()
        self._runtime_defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key (can use "/" for nested keys)
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value with type coercion and default fallback
        """
        fallback = default if default is not None else self._runtime_defaults.get(key)

        value = self._settings.value(key, fallback)

        if fallback is not None:
            try:
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans on some backends
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can use "/" for nested keys)
            value: Value to store (must be JSON-serializable)
        """
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """
        Load all configuration values merged with defaults.

        Stored values that fail schema validation are replaced by their
        defaults so a bad edit to the settings file cannot stall polling.
        """
        config = self._runtime_defaults.copy()
        for key in config:
            stored_value = self.get(key)
            if stored_value is None:
                continue
            try:
                validate_config({key: stored_value})
            except ConfigError as e:
                logger.warning(f"{e}; using default {config[key]!r}")
                continue
            config[key] = stored_value

        return config

    def poll_intervals(self) -> tuple[int, int]:
        """
        Get the log polling cadences.

        Returns:
            Tuple of (idle_ms, active_ms)
        """
        config = self.load_all()
        return config["log_poll_idle_ms"], config["log_poll_active_ms"]

    def input_extensions(self) -> tuple[str, ...]:
        """Get the accepted input file suffixes, e.g. ('.rbxl', '.rbxlx')."""
        return parse_extensions(self.load_all()["input_extensions"])
