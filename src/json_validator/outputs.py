"""Reporting of run results: log summary, JSON output and CI outputs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import orjson

from json_validator.constants import (
    ENV_GITHUB_OUTPUT,
    OUTPUT_INVALID_FILES,
    OUTPUT_VALID_FILES,
)
from json_validator.core.pipeline import display_path
from json_validator.core.results import Report
from json_validator.logger import get_logger

logger = get_logger(__name__)


def report_outputs(report: Report) -> dict[str, int]:
    """Return the named output values for a report."""
    return {
        OUTPUT_VALID_FILES: report.valid_count,
        OUTPUT_INVALID_FILES: report.invalid_count,
    }


def write_outputs(
    values: Mapping[str, object],
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Publish output values through the GitHub Actions output file.

    Appends ``name=value`` lines to the file named by ``$GITHUB_OUTPUT``.
    Outside GitHub Actions the values are only logged at debug level.

    Args:
        values: Output names and values
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The output file written to, or None when not running in Actions

    Raises:
        OSError: If the output file cannot be written

    """
    environ = os.environ if environ is None else environ
    for name, value in values.items():
        logger.debug("Output %s=%s", name, value)

    output_file = environ.get(ENV_GITHUB_OUTPUT, "")
    if not output_file:
        return None

    path = Path(output_file)
    with path.open("a", encoding="utf-8") as f:
        for name, value in values.items():
            f.write(f"{name}={value}\n")
    return path


def log_report(report: Report, cwd: Path | None = None) -> None:
    """Log the human-readable summary of a run.

    Args:
        report: Aggregated results
        cwd: Base directory for displayed paths

    """
    if report.total == 0:
        return

    logger.info("")
    logger.info("Validation Results:")
    logger.info("✓ Valid files: %d", report.valid_count)

    if report.has_invalid:
        logger.error("✗ Invalid files: %d", report.invalid_count)
        for path, error in report.errors:
            logger.error("  - %s: %s", display_path(path, cwd), error)
    else:
        logger.info("")
        logger.info("✓ All JSON files are valid!")


def render_json(report: Report) -> str:
    """Render a report as an indented JSON string."""
    return orjson.dumps(report.to_dict(), option=orjson.OPT_INDENT_2).decode()
