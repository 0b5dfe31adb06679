"""Validation result types and aggregation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from json_validator.constants import (
    OUTPUT_INVALID_FILES,
    OUTPUT_VALID_FILES,
)


@dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of validating a single document.

    Attributes:
        path: Document path
        valid: Whether the document passed every applicable check
        error: Failure description, only set when ``valid`` is False

    """

    path: Path
    valid: bool
    error: str | None = None

    @classmethod
    def success(cls, path: Path) -> ValidationResult:
        """Build a passing result."""
        return cls(path=path, valid=True)

    @classmethod
    def failure(cls, path: Path, error: str) -> ValidationResult:
        """Build a failing result carrying ``error``."""
        return cls(path=path, valid=False, error=error)


@dataclass(slots=True, frozen=True)
class Report:
    """Aggregate of all results from one run.

    Attributes:
        valid_count: Number of valid documents
        invalid_count: Number of invalid documents
        errors: (path, error) pairs for invalid documents, in input order

    """

    valid_count: int = 0
    invalid_count: int = 0
    errors: tuple[tuple[Path, str], ...] = ()

    @property
    def total(self) -> int:
        """Number of documents validated."""
        return self.valid_count + self.invalid_count

    @property
    def has_invalid(self) -> bool:
        """Whether any document was invalid."""
        return self.invalid_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with the output counts and per-file errors

        """
        return {
            OUTPUT_VALID_FILES: self.valid_count,
            OUTPUT_INVALID_FILES: self.invalid_count,
            "errors": [
                {"file": str(path), "error": error}
                for path, error in self.errors
            ],
        }


def aggregate(results: Iterable[ValidationResult]) -> Report:
    """Fold per-document results into a Report.

    Pure function; deciding whether the run failed is left to the caller.

    Args:
        results: Results in discovery order

    Returns:
        Report with counts and ordered errors

    """
    valid_count = 0
    errors: list[tuple[Path, str]] = []
    for result in results:
        if result.valid:
            valid_count += 1
        else:
            errors.append((result.path, result.error or "Unknown error"))

    return Report(
        valid_count=valid_count,
        invalid_count=len(errors),
        errors=tuple(errors),
    )
