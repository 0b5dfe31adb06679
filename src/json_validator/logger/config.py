"""Configuration loading and updating for the logging system.

Bootstrap levels come from the environment so the logger can be
initialized at import time; run settings are applied afterwards via
apply_log_settings().
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from json_validator.constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
)
from json_validator.logger.handlers import (
    create_file_handler,
    replace_listener_handlers,
)

if TYPE_CHECKING:
    from json_validator.logger.state import _LoggerState


def load_log_settings() -> tuple[str, Path | None]:
    """Load bootstrap console level and log file path.

    Environment Variables:
        JSON_VALIDATOR_LOG_LEVEL: Console level override
            (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        JSON_VALIDATOR_LOG_FILE: Enables file logging at this path

    Returns:
        Tuple of (console_level, log_file). Unknown level names fall back
        to the default level; log_file is None when file logging is off.

    """
    console_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(console_level), int):
        console_level = DEFAULT_LOG_LEVEL

    env_log_file = os.getenv(ENV_LOG_FILE)
    log_file = Path(env_log_file).expanduser() if env_log_file else None
    return console_level, log_file


def apply_log_settings(
    state: "_LoggerState",
    console_level: str | None = None,
    log_file: Path | None = None,
) -> None:
    """Update console level and attach a file handler if requested.

    Only touches handlers owned by the QueueListener; loggers keep
    their single QueueHandler.

    Args:
        state: Logger state object (from logger.state module)
        console_level: New console level name, or None to keep current
        log_file: Log file to attach, or None to leave file logging as is

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    if state.queue_listener is None:
        return

    handlers = list(state.queue_listener.handlers)
    if console_level is not None:
        level = getattr(logging, console_level.upper(), logging.INFO)
        for handler in handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level)

    if log_file is not None and str(log_file) != state.file_logging_path:
        handlers = [
            h for h in handlers if not isinstance(h, RotatingFileHandler)
        ]
        handlers.append(create_file_handler(log_file, "DEBUG"))
        replace_listener_handlers(state, handlers)
        state.file_logging_path = str(log_file)
