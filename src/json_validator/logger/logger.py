"""Main logger module providing public API functions.

- setup_logging(): Initialize the package root logger once
- get_logger(): Return a child logger, initializing the root if needed
- flush_all_handlers(): Drain the queue and flush handlers
- clear_logger_state(): Reset everything for test isolation
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from json_validator.constants import ROOT_LOGGER_NAME
from json_validator.logger.config import load_log_settings
from json_validator.logger.handlers import (
    create_console_handler,
    create_file_handler,
    setup_root_logger,
)
from json_validator.logger.state import get_state


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener to ensure writes complete.

    Waits (bounded) for the queue to drain, then flushes every handler.
    Safe to call from any thread.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    # QueueListener doesn't use task_done(), so poll the queue
    timeout = 5.0
    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > timeout:
            break
        time.sleep(0.01)

    # Give the listener thread time to hand off the last record
    time.sleep(0.05)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure logging with the QueueHandler architecture.

    The package root logger is initialized exactly once; later calls only
    return the requested logger. Child loggers propagate to the root.

    Args:
        name: Logger name, typically __name__
        console_level: Console level name (default from environment)
        log_file: Optional log file (default from environment)

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            env_console, env_log_file = load_log_settings()
            console_level = console_level or env_console
            log_file = log_file or env_log_file

            handlers: list[logging.Handler] = [
                create_console_handler(console_level)
            ]
            if log_file is not None:
                handlers.append(create_file_handler(log_file, "DEBUG"))
                state.file_logging_path = str(log_file)

            setup_root_logger(state, handlers)

    return logging.getLogger(name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get or create a logger.

    Usage:
        >>> from json_validator.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Found %d JSON file(s)", count)

    Args:
        name: Logger name, typically __name__ for module loggers

    Returns:
        Configured logger instance

    """
    return setup_logging(name=name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes handlers and resets state flags.
    Loggers in the "json_validator" namespace lose their handlers.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.file_logging_path = None

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(ROOT_LOGGER_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
