"""Logging formatters for console output.

- ColoredConsoleFormatter: Adds ANSI color codes to log levels
- HybridConsoleFormatter: Bare message for INFO, colored metadata otherwise

Validation summaries are emitted at INFO, so they print as plain lines
while warnings and errors keep their level and origin.
"""

import logging

from json_validator.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI color support for different log levels."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name.

        The record's levelname is swapped for the duration of the call
        and restored afterwards.

        Args:
            record: The log record to format

        Returns:
            Formatted log message with ANSI color codes for the level name

        """
        if record.levelname not in LOG_COLORS:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = (
            f"{LOG_COLORS[original_levelname]}{original_levelname}"
            f"{LOG_COLORS['RESET']}"
        )
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class HybridConsoleFormatter(logging.Formatter):
    """Plain message for INFO records, colored structured line for others.

    Example Output:
        INFO:     "Found 3 JSON file(s)"
        WARNING:  "12:30:45 - json_validator.core.pipeline - WARNING - ..."

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize hybrid formatter with structured format template.

        Args:
            fmt: Format string for non-INFO messages
            datefmt: Date format string for timestamps

        """
        super().__init__(fmt, datefmt)
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record using plain or structured format by level.

        Args:
            record: The log record to format

        Returns:
            Formatted message

        """
        if record.levelno == logging.INFO:
            return record.getMessage()
        return self._colored_formatter.format(record)
