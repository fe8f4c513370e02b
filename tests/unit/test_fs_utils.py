"""Tests for cross-platform file system utilities."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

from gui.utils.fs import open_in_file_manager, shorten_path


class TestOpenInFileManager:
    """Test cases for the open_in_file_manager function."""

    def test_nonexistent_path_returns_false(self, tmp_path):
        """Test that non-existent paths return False without attempting to open."""
        assert open_in_file_manager(tmp_path / "does_not_exist") is False

    def test_file_path_returns_false(self, tmp_path):
        """Test that file paths (not directories) return False."""
        test_file = tmp_path / "game.rbxl"
        test_file.write_text("test content")

        assert open_in_file_manager(test_file) is False

    @patch.object(QDesktopServices, "openUrl")
    def test_qdesktopservices_success(self, mock_open_url, tmp_path):
        """Test successful opening using QDesktopServices."""
        mock_open_url.return_value = True

        assert open_in_file_manager(tmp_path) is True

        call_args = mock_open_url.call_args[0][0]
        assert isinstance(call_args, QUrl)
        assert call_args.isLocalFile()
        assert Path(call_args.toLocalFile()) == tmp_path.resolve()

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Windows")
    def test_windows_fallback(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        assert open_in_file_manager(tmp_path) is True
        mock_subprocess.assert_called_once_with(["explorer", str(tmp_path.resolve())], check=False)

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Darwin")
    def test_macos_fallback(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        assert open_in_file_manager(tmp_path) is True
        mock_subprocess.assert_called_once_with(["open", str(tmp_path.resolve())], check=False)

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Linux")
    def test_linux_fallback(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        mock_subprocess.return_value = Mock(returncode=0)

        assert open_in_file_manager(tmp_path) is True
        mock_subprocess.assert_called_once_with(["xdg-open", str(tmp_path.resolve())], check=False, capture_output=True)

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Linux")
    def test_linux_fallback_failure(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        mock_subprocess.return_value = Mock(returncode=1)

        assert open_in_file_manager(tmp_path) is False

    @patch.object(QDesktopServices, "openUrl", side_effect=Exception("Qt error"))
    @patch("subprocess.run", side_effect=FileNotFoundError("xdg-open"))
    @patch("platform.system", return_value="Linux")
    def test_all_methods_fail(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        assert open_in_file_manager(tmp_path) is False

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run", side_effect=subprocess.SubprocessError("Command failed"))
    @patch("platform.system", return_value="Windows")
    def test_subprocess_exception_handling(self, mock_system, mock_subprocess, mock_open_url, tmp_path):
        assert open_in_file_manager(tmp_path) is False


class TestShortenPath:
    def test_short_path_unchanged(self):
        assert shorten_path("/home/dev/out") == "/home/dev/out"

    def test_exactly_threshold_unchanged(self):
        path = "/a/" + "b" * 47
        assert len(path) == 50
        assert shorten_path(path) == path

    def test_long_posix_path(self):
        path = "/home/developer/projects/roblox/experiences/obby/builds/release"
        assert shorten_path(path) == "/.../builds/release"

    def test_long_windows_path(self):
        path = "C:\\Users\\developer\\Documents\\Roblox\\Places\\Obby Course\\obby.rbxl"
        assert shorten_path(path) == "C:/.../Obby Course/obby.rbxl"

    @pytest.mark.parametrize("path", ["x" * 80, "/" + "y" * 60 + "/z"])
    def test_long_path_with_few_components_unchanged(self, path):
        assert shorten_path(path) == path

    def test_custom_threshold(self):
        assert shorten_path("/a/b/c/d", threshold=5) == "/.../c/d"
