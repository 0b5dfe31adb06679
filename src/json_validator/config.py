"""Run settings for json-validator.

Settings are merged from four layers, later layers winning:

1. Built-in defaults
2. An optional INI file (``--config``), section ``[json-validator]``
3. Environment variables (``INPUT_<NAME>`` as set by GitHub Actions,
   plus ``JSON_VALIDATOR_LOG_LEVEL`` / ``JSON_VALIDATOR_LOG_FILE``)
4. Command-line arguments

Example INI file::

    [json-validator]
    folder = data
    schema = schemas/record.schema.json
    ignore = **/fixtures/**, **/node_modules/**
    fail_on_invalid = true
"""

import configparser
import os
from argparse import Namespace
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from json_validator.constants import (
    CONFIG_SECTION,
    DEFAULT_CONCURRENCY,
    DEFAULT_FAIL_ON_INVALID,
    DEFAULT_FOLDER,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    ENV_INPUT_PREFIX,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    FALSE_VALUES,
    KEY_CONCURRENCY,
    KEY_FAIL_ON_INVALID,
    KEY_FOLDER,
    KEY_IGNORE,
    KEY_LOG_FILE,
    KEY_LOG_LEVEL,
    KEY_OUTPUT_FORMAT,
    KEY_SCHEMA,
    LOG_LEVELS,
    OUTPUT_FORMATS,
    TRUE_VALUES,
)
from json_validator.exceptions import ConfigurationError
from json_validator.logger import get_logger

logger = get_logger(__name__)

# Raw layer values keyed by setting name, before type conversion
RawSettings = dict[str, str]

_INPUT_KEYS = (
    KEY_FOLDER,
    KEY_SCHEMA,
    KEY_IGNORE,
    KEY_FAIL_ON_INVALID,
    KEY_CONCURRENCY,
)


@dataclass(frozen=True)
class Settings:
    """Effective settings for one validation run."""

    folder: str = DEFAULT_FOLDER
    schema: str | None = None
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    fail_on_invalid: bool = DEFAULT_FAIL_ON_INVALID
    concurrency: int = DEFAULT_CONCURRENCY
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None
    output_format: str = DEFAULT_OUTPUT_FORMAT


def parse_patterns(text: str | None) -> tuple[str, ...]:
    """Split a comma- or newline-separated pattern list.

    Args:
        text: Raw pattern list

    Returns:
        Non-empty, stripped patterns in order; empty tuple for blank input

    """
    if not text:
        return ()
    parts = text.replace("\r\n", "\n").replace("\n", ",").split(",")
    return tuple(p.strip() for p in parts if p.strip())


def parse_bool(value: str | bool, name: str = KEY_FAIL_ON_INVALID) -> bool:
    """Parse a boolean setting.

    Args:
        value: Raw value ("true"/"false", "yes"/"no", "1"/"0", "on"/"off")
        name: Setting name used in the error message

    Returns:
        Parsed boolean

    Raises:
        ConfigurationError: If the value is not a recognized boolean

    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    msg = f"Expected a boolean, got '{value}'"
    raise ConfigurationError(msg, target=name)


def _env_names(key: str) -> tuple[str, ...]:
    upper = key.upper()
    hyphenated = upper.replace("_", "-")
    if hyphenated == upper:
        return (f"{ENV_INPUT_PREFIX}{upper}",)
    return (f"{ENV_INPUT_PREFIX}{hyphenated}", f"{ENV_INPUT_PREFIX}{upper}")


class SettingsManager:
    """Builds Settings from defaults, INI file, environment and CLI."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize settings manager.

        Args:
            environ: Environment mapping (defaults to os.environ)

        """
        self.environ = os.environ if environ is None else environ

    def load(
        self,
        args: Namespace | None = None,
        config_file: Path | None = None,
    ) -> Settings:
        """Load the effective settings.

        Args:
            args: Parsed command-line arguments
            config_file: Optional INI file; ``args.config`` is used when
                not given

        Returns:
            Effective settings

        Raises:
            ConfigurationError: If the INI file is unreadable or a value
                is invalid

        """
        if config_file is None and args is not None:
            config_path = getattr(args, "config", None)
            config_file = Path(config_path) if config_path else None

        raw: RawSettings = {}
        if config_file is not None:
            raw.update(self.read_config_file(config_file))
        raw.update(self.read_environment())
        if args is not None:
            raw.update(self.read_arguments(args))

        settings = self._build(raw)
        logger.debug("Effective settings: %s", settings)
        return settings

    @staticmethod
    def read_config_file(config_file: Path) -> RawSettings:
        """Read settings from an INI file.

        Args:
            config_file: Path to the INI file

        Returns:
            Raw values from the ``[json-validator]`` section

        Raises:
            ConfigurationError: If the file is missing or malformed

        """
        parser = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        try:
            with config_file.open(encoding="utf-8") as f:
                parser.read_file(f)
        except OSError as e:
            raise ConfigurationError(str(e), target=str(config_file)) from e
        except configparser.Error as e:
            raise ConfigurationError(str(e), target=str(config_file)) from e

        if not parser.has_section(CONFIG_SECTION):
            logger.warning(
                "No [%s] section in %s, using defaults",
                CONFIG_SECTION,
                config_file,
            )
            return {}

        section = parser[CONFIG_SECTION]
        return {
            key.replace("-", "_"): value
            for key, value in section.items()
            if value.strip()
        }

    def read_environment(self) -> RawSettings:
        """Read settings from environment variables.

        Empty variables count as unset, matching how GitHub Actions
        passes inputs that were not provided.

        Returns:
            Raw values found in the environment

        """
        raw: RawSettings = {}
        for key in _INPUT_KEYS:
            for env_name in _env_names(key):
                value = self.environ.get(env_name, "")
                if value.strip():
                    raw[key] = value
                    break

        for key, env_name in (
            (KEY_LOG_LEVEL, ENV_LOG_LEVEL),
            (KEY_LOG_FILE, ENV_LOG_FILE),
        ):
            value = self.environ.get(env_name, "")
            if value.strip():
                raw[key] = value
        return raw

    @staticmethod
    def read_arguments(args: Namespace) -> RawSettings:
        """Read settings given on the command line.

        Args:
            args: Parsed arguments from CLIParser

        Returns:
            Raw values for options that were actually given

        """
        raw: RawSettings = {}
        folder = getattr(args, "folder", None)
        if folder:
            raw[KEY_FOLDER] = folder
        schema = getattr(args, "schema", None)
        if schema:
            raw[KEY_SCHEMA] = schema
        ignore = getattr(args, "ignore", None)
        if ignore:
            raw[KEY_IGNORE] = "\n".join(ignore)
        fail_on_invalid = getattr(args, "fail_on_invalid", None)
        if fail_on_invalid is not None:
            raw[KEY_FAIL_ON_INVALID] = str(fail_on_invalid)
        concurrency = getattr(args, "concurrency", None)
        if concurrency is not None:
            raw[KEY_CONCURRENCY] = str(concurrency)
        if getattr(args, "verbose", False):
            raw[KEY_LOG_LEVEL] = "DEBUG"
        log_file = getattr(args, "log_file", None)
        if log_file:
            raw[KEY_LOG_FILE] = log_file
        output_format = getattr(args, "format", None)
        if output_format:
            raw[KEY_OUTPUT_FORMAT] = output_format
        return raw

    @staticmethod
    def _build(raw: RawSettings) -> Settings:
        ignore_patterns = parse_patterns(raw.get(KEY_IGNORE))

        concurrency_raw = raw.get(KEY_CONCURRENCY, str(DEFAULT_CONCURRENCY))
        try:
            concurrency = int(concurrency_raw)
        except ValueError as e:
            msg = f"Expected an integer, got '{concurrency_raw}'"
            raise ConfigurationError(msg, target=KEY_CONCURRENCY) from e
        if concurrency < 1:
            msg = f"Must be at least 1, got {concurrency}"
            raise ConfigurationError(msg, target=KEY_CONCURRENCY)

        log_level = raw.get(KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in LOG_LEVELS:
            msg = f"Expected one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
            raise ConfigurationError(msg, target=KEY_LOG_LEVEL)

        output_format = raw.get(KEY_OUTPUT_FORMAT, DEFAULT_OUTPUT_FORMAT)
        output_format = output_format.strip().lower()
        if output_format not in OUTPUT_FORMATS:
            msg = (
                f"Expected one of {', '.join(OUTPUT_FORMATS)}, "
                f"got '{output_format}'"
            )
            raise ConfigurationError(msg, target=KEY_OUTPUT_FORMAT)

        log_file = raw.get(KEY_LOG_FILE)

        return Settings(
            folder=raw.get(KEY_FOLDER, DEFAULT_FOLDER).strip(),
            schema=raw.get(KEY_SCHEMA, "").strip() or None,
            ignore_patterns=ignore_patterns or DEFAULT_IGNORE_PATTERNS,
            fail_on_invalid=parse_bool(
                raw.get(KEY_FAIL_ON_INVALID, DEFAULT_FAIL_ON_INVALID)
            ),
            concurrency=concurrency,
            log_level=log_level,
            log_file=Path(log_file).expanduser() if log_file else None,
            output_format=output_format,
        )
