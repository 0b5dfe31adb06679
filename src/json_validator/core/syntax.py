"""Syntax-only validation of JSON documents."""

from __future__ import annotations

from pathlib import Path

from json_validator.core.document import Document, as_document
from json_validator.core.results import ValidationResult
from json_validator.exceptions import DocumentError
from json_validator.logger import get_logger

logger = get_logger(__name__)


def check_syntax(source: Document | Path | str) -> ValidationResult:
    """Check that a document is readable, well-formed JSON.

    Never raises. Read failures are reported as
    ``"Failed to read file: ..."`` and parse failures as
    ``"Invalid JSON syntax: ..."``.

    Args:
        source: A loaded Document or a path to read

    Returns:
        ValidationResult for the document

    """
    document = as_document(source)
    try:
        document.parse()
    except DocumentError as e:
        logger.debug("Syntax check failed for %s: %s", document.path, e)
        return ValidationResult.failure(document.path, str(e))
    return ValidationResult.success(document.path)
