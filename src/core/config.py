"""
Configuration management for the Parcel GUI.

This module provides the configuration schema, defaults, and helpers for
locating application directories.
"""

from pathlib import Path
from typing import Any

import jsonschema
from PySide6.QtCore import QCoreApplication, QStandardPaths

from .errors import ConfigError, ErrorCode

# Application identifiers for QSettings
APP_ORGANIZATION = "Parcel"
APP_NAME = "ParcelGUI"

# Place file formats accepted by the converter
DEFAULT_INPUT_EXTENSIONS = "rbxl,rbxlx"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Log polling cadence
    "log_poll_idle_ms": 2000,
    "log_poll_active_ms": 300,
    "log_buffer_size": 5000,
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
    # Converter settings
    "converter_command": "parcel {input} {output}",
    "input_extensions": DEFAULT_INPUT_EXTENSIONS,
}

# JSON Schema for configuration validation (draft-07)
CONFIG_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Parcel GUI Configuration",
    "type": "object",
    "properties": {
        "log_poll_idle_ms": {"type": "integer", "minimum": 50, "maximum": 60000},
        "log_poll_active_ms": {"type": "integer", "minimum": 50, "maximum": 60000},
        "log_buffer_size": {"type": "integer", "minimum": 1},
        "log_level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
        "converter_command": {
            "type": "string",
            "minLength": 1,
            "allOf": [{"pattern": "\\{input\\}"}, {"pattern": "\\{output\\}"}],
        },
        "input_extensions": {"type": "string", "pattern": "^[A-Za-z0-9]+(,[A-Za-z0-9]+)*$"},
    },
}


def validate_config(config: dict[str, Any]) -> None:
    """
    Validate a configuration dictionary against the JSON schema.

    Args:
        config: Configuration values to check

    Raises:
        ConfigError: If any value violates the schema
    """
    try:
        jsonschema.validate(instance=config, schema=CONFIG_JSON_SCHEMA)
    except jsonschema.ValidationError as e:
        key = ".".join(str(part) for part in e.absolute_path) or "<root>"
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"Invalid configuration value for '{key}': {e.message}",
            technical_message=str(e),
            context={"key": key},
        ) from e


def parse_extensions(value: str) -> tuple[str, ...]:
    """
    Split a comma separated extension list into lowercase dotted suffixes.

    >>> parse_extensions("rbxl, RBXLX")
    ('.rbxl', '.rbxlx')
    """
    return tuple(f".{part.strip().lstrip('.').lower()}" for part in value.split(",") if part.strip())


def get_app_config_dir() -> Path:
    """
    Get the application configuration directory using QStandardPaths.

    Returns:
        Path to the writable configuration directory for this application
    """
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_logs_dir() -> Path:
    """Get the directory where the rotating application log is written."""
    app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if not app_data_location:
        return get_app_config_dir() / "logs"
    return Path(app_data_location) / "logs"


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
