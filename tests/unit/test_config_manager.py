"""
Tests for the ConfigManager class.
"""

from unittest.mock import Mock, patch

from core.config import DEFAULT_CONFIG
from core.config_manager import ConfigManager


class TestConfigManager:
    """Test cases for ConfigManager with a mocked QSettings."""

    def setup_method(self) -> None:
        self.settings_patcher = patch("core.config_manager.QSettings")
        self.mock_qsettings_class = self.settings_patcher.start()
        self.mock_qsettings = Mock()
        self.mock_qsettings_class.return_value = self.mock_qsettings

        self.setup_patcher = patch("core.config_manager.setup_qsettings")
        self.mock_setup = self.setup_patcher.start()

    def teardown_method(self) -> None:
        self.settings_patcher.stop()
        self.setup_patcher.stop()

    def _store(self, values: dict) -> None:
        self.mock_qsettings.value.side_effect = lambda key, default=None: values.get(key, default)

    def test_init(self) -> None:
        ConfigManager()

        self.mock_setup.assert_called_once()
        self.mock_qsettings_class.assert_called_once()

    def test_get_with_default(self) -> None:
        self._store({})

        assert ConfigManager().get("log_poll_idle_ms") == 2000
        self.mock_qsettings.value.assert_called_with("log_poll_idle_ms", 2000)

    def test_get_integer_coercion(self) -> None:
        # QSettings returns strings from INI files
        self._store({"log_poll_active_ms": "450"})

        assert ConfigManager().get("log_poll_active_ms") == 450

    def test_get_invalid_integer_falls_back(self) -> None:
        self._store({"log_poll_active_ms": "soon"})

        assert ConfigManager().get("log_poll_active_ms") == 300

    def test_get_explicit_default(self) -> None:
        self._store({})

        assert ConfigManager().get("paths/last_output_dir", "") == ""

    def test_set_syncs(self) -> None:
        ConfigManager().set("log_level", "DEBUG")

        self.mock_qsettings.setValue.assert_called_once_with("log_level", "DEBUG")
        self.mock_qsettings.sync.assert_called_once()

    def test_load_all_merges_defaults(self) -> None:
        self._store({"converter_command": "rbxl2proj {input} {output}"})

        config = ConfigManager().load_all()

        assert config["converter_command"] == "rbxl2proj {input} {output}"
        assert config["log_poll_idle_ms"] == DEFAULT_CONFIG["log_poll_idle_ms"]
        assert set(config) == set(DEFAULT_CONFIG)

    def test_load_all_replaces_invalid_values(self) -> None:
        self._store({"log_poll_idle_ms": 1, "converter_command": "no placeholders"})

        config = ConfigManager().load_all()

        assert config["log_poll_idle_ms"] == DEFAULT_CONFIG["log_poll_idle_ms"]
        assert config["converter_command"] == DEFAULT_CONFIG["converter_command"]

    def test_poll_intervals(self) -> None:
        self._store({"log_poll_idle_ms": 1500, "log_poll_active_ms": 250})

        assert ConfigManager().poll_intervals() == (1500, 250)

    def test_input_extensions(self) -> None:
        self._store({"input_extensions": "rbxl"})

        assert ConfigManager().input_extensions() == (".rbxl",)


def test_round_trip_with_real_settings(qapp):
    """Values survive a new ConfigManager instance backed by the same store."""
    ConfigManager().set("log_poll_active_ms", 500)

    assert ConfigManager().poll_intervals() == (2000, 500)
