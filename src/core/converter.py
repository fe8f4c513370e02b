"""
Blocking conversion task executed by the local backend.

The actual conversion is performed by an external converter command. This
module validates the request, prepares the output directory, runs the
command and forwards its output to the converter logger, which feeds the log
buffer the UI polls.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from .backend_interface import ConversionRequest, ConversionResult
from .config import DEFAULT_CONFIG, DEFAULT_INPUT_EXTENSIONS, parse_extensions
from .errors import ConversionError, ErrorCode, FileError, SelectionError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_STEM = "project"


def check_extension(path: Path, extensions: tuple[str, ...]) -> None:
    """
    Check that a file has one of the accepted suffixes.

    Raises:
        SelectionError: If the suffix is not accepted
    """
    if path.suffix.lower() not in extensions:
        names = " and ".join(extensions)
        raise SelectionError(
            code=ErrorCode.INVALID_FILE_EXTENSION,
            user_message=f"Invalid file extension. Only {names} files are supported.",
            context={"path": str(path)},
        )


def output_path_for(request: ConversionRequest) -> Path:
    """The folder a request's converted project is written to."""
    stem = Path(request.input_path).stem or DEFAULT_OUTPUT_STEM
    return Path(request.output_folder) / stem


def build_command(template: str, input_path: Path, output_path: Path) -> list[str]:
    """
    Expand the converter command template.

    The {input} and {output} placeholders are substituted per argument so
    paths containing spaces stay single arguments.
    """
    return [
        part.replace("{input}", str(input_path)).replace("{output}", str(output_path))
        for part in shlex.split(template)
    ]


def convert(
    request: ConversionRequest,
    command_template: str = DEFAULT_CONFIG["converter_command"],
    extensions: tuple[str, ...] = parse_extensions(DEFAULT_INPUT_EXTENSIONS),
) -> ConversionResult:
    """
    Convert a place file into a project folder.

    Args:
        request: Input file and output folder
        command_template: Converter command with {input}/{output} placeholders
        extensions: Accepted input suffixes

    Returns:
        ConversionResult for the created project folder

    Raises:
        SelectionError: If the input has an unsupported extension
        FileError: If the input cannot be opened or the output cannot be created
        ConversionError: If the converter is missing or exits with an error
    """
    input_path = Path(request.input_path)

    logger.info("Starting conversion...")
    logger.info(f"Input file: {input_path}")
    logger.info(f"Output folder: {request.output_folder}")

    try:
        check_extension(input_path, extensions)
    except SelectionError:
        logger.info("Error: Invalid file extension")
        raise

    logger.info("Opening place file...")
    try:
        with input_path.open("rb"):
            pass
    except OSError as e:
        raise FileError(
            code=ErrorCode.FILE_OPEN_FAILED,
            user_message=f"Failed to open file: {e}",
            technical_message=repr(e),
            context={"path": str(input_path)},
        ) from e

    output_path = output_path_for(request)
    logger.info(f"Creating output directory: {output_path}")
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileError(
            code=ErrorCode.DIRECTORY_CREATE_FAILED,
            user_message=f"Failed to create output directory: {e}",
            technical_message=repr(e),
            context={"path": str(output_path)},
        ) from e

    logger.info("Processing place file (this may take a moment for large files)...")
    _run_converter(build_command(command_template, input_path, output_path))

    logger.info("Conversion completed successfully!")
    logger.info(f"Output saved to: {output_path}")

    return ConversionResult(
        output_path=str(output_path),
        message=f"Successfully converted to {output_path}",
    )


def _run_converter(command: list[str]) -> None:
    """Run the converter, logging each line it prints."""
    logger.debug(f"Running converter: {shlex.join(command)}")
    try:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as e:
        raise ConversionError(
            code=ErrorCode.CONVERTER_NOT_FOUND,
            user_message=f"Converter not found: {command[0]}",
            technical_message=repr(e),
            retriable=False,
        ) from e

    last_line = ""
    with process.stdout:
        for raw_line in process.stdout:
            line = raw_line.rstrip()
            if not line:
                continue
            last_line = line
            _log_converter_line(line)

    returncode = process.wait()
    if returncode != 0:
        detail = last_line or f"exit code {returncode}"
        raise ConversionError(
            code=ErrorCode.CONVERSION_FAILED,
            user_message=f"Conversion task failed: {detail}",
            technical_message=f"{shlex.join(command)} exited with {returncode}",
            context={"returncode": returncode},
        )


def _log_converter_line(line: str) -> None:
    lowered = line.lower()
    if lowered.startswith("error"):
        logger.error(line)
    elif lowered.startswith("warn"):
        logger.warning(line)
    else:
        logger.info(line)
