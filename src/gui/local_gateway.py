"""
Backend gateway backed by native dialogs, a worker thread and the log buffer.

Quick operations are settled on the next event loop iteration so callers see
the same asynchronous contract as for the conversion, which runs on a
GatewayWorker thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any

from PySide6.QtCore import QObject, QTimer
from PySide6.QtWidgets import QFileDialog, QWidget

from core import converter
from core.backend_interface import BackendGateway, ConversionRequest, GatewayCall
from core.config_manager import ConfigManager
from core.errors import ErrorCode, FileError, from_exception
from core.log_buffer import LogBuffer, LogBufferHandler
from core.threading import TaskRunner
from gui.utils.fs import open_in_file_manager

logger = logging.getLogger(__name__)

LAST_OUTPUT_DIR_KEY = "paths/last_output_dir"
LAST_INPUT_DIR_KEY = "paths/last_input_dir"


class LocalBackendGateway(BackendGateway):
    """
    Backend gateway for the desktop application.

    Captures everything the converter logs into an in-memory LogBuffer and
    serves it to fetch_logs().
    """

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        log_buffer: LogBuffer | None = None,
        dialog_parent: QWidget | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config_manager or ConfigManager()
        settings = self._config.load_all()

        self._command_template: str = settings["converter_command"]
        self._extensions = self._config.input_extensions()
        self._dialog_parent = dialog_parent

        self._log_buffer = log_buffer if log_buffer is not None else LogBuffer(settings["log_buffer_size"])
        self._log_handler = LogBufferHandler(self._log_buffer)
        converter_logger = logging.getLogger(converter.__name__)
        converter_logger.addHandler(self._log_handler)
        if converter_logger.getEffectiveLevel() > logging.INFO:
            converter_logger.setLevel(logging.INFO)

        self._runner = TaskRunner(self)

    @property
    def log_buffer(self) -> LogBuffer:
        return self._log_buffer

    def select_output_folder(self) -> GatewayCall:
        return self._deferred("select_output_folder", self._pick_output_folder)

    def select_input_file(self) -> GatewayCall:
        return self._deferred("select_input_file", self._pick_input_file)

    def run_conversion(self, request: ConversionRequest) -> GatewayCall:
        task = partial(converter.convert, request, self._command_template, self._extensions)
        return self._runner.submit(task, name="run_conversion")

    def fetch_logs(self) -> GatewayCall:
        return self._deferred("fetch_logs", self._log_buffer.snapshot)

    def clear_logs(self) -> GatewayCall:
        return self._deferred("clear_logs", self._log_buffer.clear)

    def open_folder(self, path: str) -> GatewayCall:
        return self._deferred("open_folder", partial(self._open_folder, Path(path)))

    def shutdown(self) -> None:
        self._runner.shutdown()
        logging.getLogger(converter.__name__).removeHandler(self._log_handler)

    def _deferred(self, operation: str, func: Callable[[], Any]) -> GatewayCall:
        """Run func on the next event loop iteration and settle a call with its outcome."""
        call = GatewayCall(operation)
        QTimer.singleShot(0, partial(self._settle, call, func))
        return call

    def _settle(self, call: GatewayCall, func: Callable[[], Any]) -> None:
        try:
            value = func()
        except Exception as e:
            logger.debug(f"{call.operation} failed: {e}")
            call.reject(from_exception(e, {"operation": call.operation}))
        else:
            call.resolve(value)

    def _pick_output_folder(self) -> str | None:
        start_dir = self._config.get(LAST_OUTPUT_DIR_KEY, "")
        folder = QFileDialog.getExistingDirectory(self._dialog_parent, "Select Output Folder", start_dir)
        if not folder:
            return None
        self._config.set(LAST_OUTPUT_DIR_KEY, folder)
        return folder

    def _pick_input_file(self) -> str | None:
        start_dir = self._config.get(LAST_INPUT_DIR_KEY, "")
        patterns = " ".join(f"*{ext}" for ext in self._extensions)
        file_path, _ = QFileDialog.getOpenFileName(
            self._dialog_parent,
            "Select Place File",
            start_dir,
            f"Place Files ({patterns})",
        )
        if not file_path:
            return None

        path = Path(file_path)
        converter.check_extension(path, self._extensions)
        self._config.set(LAST_INPUT_DIR_KEY, str(path.parent))
        return file_path

    def _open_folder(self, path: Path) -> None:
        if not open_in_file_manager(path):
            raise FileError(
                code=ErrorCode.OPEN_FOLDER_FAILED,
                user_message=f"Could not open folder: {path}",
                context={"path": str(path)},
            )
