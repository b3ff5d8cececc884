"""Logging utilities for POLI.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to POLI log files. Each logger is
self-contained and does not modify global structlog configuration.
"""

import logging
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_poli_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, POLI_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("POLI_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str,
    *,
    log_level: int = logging.INFO,
    log_format: LogFormatType = "json",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (will be opened in append mode).
        log_level: Minimum level that is written.
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation. Must be set with
            backup_count for rotation to be enabled.
        backup_count: Number of rotated log files to keep. Must be set with
            max_bytes for rotation to be enabled.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    stdlib_logger: logging.Logger | None = None
    if max_bytes is not None and backup_count is not None:
        stdlib_logger = logging.getLogger(f"poli_qa.{log_path.stem}.{id(log_path)}")
        stdlib_logger.handlers.clear()
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(log_level)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        handler.setLevel(log_level)
        # structlog renders the message; the handler only writes it
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)

        logger_factory = structlog.stdlib.LoggerFactory()
    else:
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(log_level)
    raw_logger = stdlib_logger if stdlib_logger is not None else logger_factory()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
    project_root: Path | None = None,
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":
    """Create a logger for CLI commands.

    Creates a standalone structlog logger that writes structured logs
    to either a specified file or the default CLI log file at .poli/logs/cli.log.

    The log level can be overridden by environment variables:
    - POLI_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses default .poli/logs/cli.log if empty).
        command: Name of the CLI command for context (bound to all entries).
        project_root: Project root used to locate the default log file.
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated log files to keep.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = (
        log_file if log_file else str(get_poli_cli_log_file(project_root))
    )
    effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )

    if command:
        return logger.bind(command=command)
    return logger


def get_library_logger() -> "FilteringBoundLogger":
    """Return the logger used by library code when none is injected.

    The returned logger follows whatever structlog configuration the
    embedding application has installed.
    """
    return cast("FilteringBoundLogger", structlog.get_logger("poli_qa"))
