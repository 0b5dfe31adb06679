"""Logging utilities for json-validator.

Architecture:
    Application → QueueHandler → Queue → QueueListener Thread
                                              ↓
                                    Console (+ optional File) Handlers

Documents may be read and validated in worker threads, so every logger
writes into one shared queue and only the listener performs I/O.

Usage:
    >>> from json_validator.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Validating %s", path)  # Use %-style formatting

Environment Variables:
    JSON_VALIDATOR_LOG_LEVEL: Console level at startup
    JSON_VALIDATOR_LOG_FILE: Enable file logging at startup

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls
"""

from pathlib import Path

from json_validator.logger.config import apply_log_settings as _apply
from json_validator.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from json_validator.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from json_validator.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "configure_logging",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
]


def configure_logging(
    console_level: str | None = None, log_file: Path | None = None
) -> None:
    """Apply run settings to the already initialized logger.

    Args:
        console_level: Console level name, or None to keep current
        log_file: Log file to attach, or None

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    setup_logging()
    _apply(get_state(), console_level=console_level, log_file=log_file)
