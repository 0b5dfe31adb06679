"""Pytest configuration and fixtures for json-validator tests."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from json_validator.constants import ROOT_LOGGER_NAME

WriteFile = Callable[[str, Any], Path]


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith(ROOT_LOGGER_NAME):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    """Write a file below tmp_path.

    Strings are written verbatim, anything else is dumped as JSON.
    Parent directories are created as needed.
    """

    def _write(relative: str, content: Any) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def product_schema() -> dict[str, Any]:
    """Schema requiring a non-negative price and a name."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "required": ["name", "price"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "price": {"type": "number", "minimum": 0},
        },
    }


@pytest.fixture
def user_schema() -> dict[str, Any]:
    """Schema for user records with format checks."""
    return {
        "type": "object",
        "required": ["id", "email"],
        "properties": {
            "id": {"type": "integer", "exclusiveMinimum": 0},
            "email": {"type": "string", "format": "email"},
            "created": {"type": "string", "format": "date-time"},
            "role": {"enum": ["admin", "member"]},
        },
        "additionalProperties": False,
    }
