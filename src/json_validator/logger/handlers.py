"""Handler creation and management for the logging system.

All handlers are owned by a QueueListener; loggers only ever carry a
QueueHandler so that worker threads and the event loop never block on
handler I/O.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from json_validator.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_MAX_FILE_SIZE_BYTES,
    ROOT_LOGGER_NAME,
)
from json_validator.exceptions import ConfigurationError
from json_validator.logger.formatters import HybridConsoleFormatter


def create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create console handler writing to stdout.

    Args:
        console_level: Log level name (e.g., "DEBUG", "INFO")

    Returns:
        Configured StreamHandler

    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        HybridConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
        )
    )
    console_handler.setLevel(getattr(logging, console_level, logging.INFO))
    return console_handler


def create_file_handler(log_file: Path, file_level: str) -> RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level name for the file

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_MAX_FILE_SIZE_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg, target=str(log_file)) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(getattr(logging, file_level, logging.DEBUG))
    return file_handler


def setup_root_logger(state, handlers: list[logging.Handler]) -> None:
    """Initialize the package root logger with a QueueListener.

    Args:
        state: Logger state object (from logger.state module)
        handlers: Handlers the listener dispatches records to

    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    # Remove any existing handlers (for test isolation)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    state.log_queue = queue.Queue(-1)
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()

    root_logger.addHandler(QueueHandler(state.log_queue))
    state.root_initialized = True


def replace_listener_handlers(state, handlers: list[logging.Handler]) -> None:
    """Swap the handlers owned by the running QueueListener.

    The listener is stopped (draining queued records to the old
    handlers) and restarted with the new set.

    Args:
        state: Logger state object
        handlers: New handler list

    """
    if state.queue_listener is None or state.log_queue is None:
        return

    state.queue_listener.stop()
    for handler in state.queue_listener.handlers:
        if handler not in handlers:
            handler.close()
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()
