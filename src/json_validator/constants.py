"""Centralized constants module for json-validator.

This module serves as the single source of truth for shared constants.
Constants are organized by logical categories and use typing.Final
annotations to ensure immutability.

Usage:
    from json_validator.constants import DEFAULT_IGNORE_PATTERNS
"""

from typing import Final

# =============================================================================
# Discovery Constants
# =============================================================================

DEFAULT_FOLDER: Final[str] = "."

# Only files matching this pattern are treated as documents
JSON_FILE_PATTERN: Final[str] = "*.json"

DEFAULT_IGNORE_PATTERNS: Final[tuple[str, ...]] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/lib/**",
    "**/.git/**",
)

# =============================================================================
# Schema Constants
# =============================================================================

SCHEMA_KEY: Final[str] = "$schema"

# Schema references with these prefixes are never fetched
REMOTE_SCHEMA_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://")

VIOLATION_SEPARATOR: Final[str] = ", "

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_SECTION: Final[str] = "json-validator"

DEFAULT_FAIL_ON_INVALID: Final[bool] = True
DEFAULT_CONCURRENCY: Final[int] = 1
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_OUTPUT_FORMAT: Final[str] = "text"
OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json")

KEY_FOLDER: Final[str] = "folder"
KEY_SCHEMA: Final[str] = "schema"
KEY_IGNORE: Final[str] = "ignore"
KEY_FAIL_ON_INVALID: Final[str] = "fail_on_invalid"
KEY_CONCURRENCY: Final[str] = "concurrency"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_LOG_FILE: Final[str] = "log_file"
KEY_OUTPUT_FORMAT: Final[str] = "output_format"

LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# GitHub Actions exposes action inputs as INPUT_<NAME> with the name
# upper-cased and hyphens preserved
ENV_INPUT_PREFIX: Final[str] = "INPUT_"
ENV_LOG_LEVEL: Final[str] = "JSON_VALIDATOR_LOG_LEVEL"
ENV_LOG_FILE: Final[str] = "JSON_VALIDATOR_LOG_FILE"
ENV_GITHUB_OUTPUT: Final[str] = "GITHUB_OUTPUT"

TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})

# =============================================================================
# Output Constants
# =============================================================================

OUTPUT_VALID_FILES: Final[str] = "valid-files"
OUTPUT_INVALID_FILES: Final[str] = "invalid-files"

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1

# =============================================================================
# Logging Constants
# =============================================================================

ROOT_LOGGER_NAME: Final[str] = "json_validator"

LOG_MAX_FILE_SIZE_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
