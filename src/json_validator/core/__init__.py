"""Core validation pipeline: discovery, documents, syntax checks, results."""

from json_validator.core.discovery import discover
from json_validator.core.document import Document
from json_validator.core.results import Report, ValidationResult, aggregate
from json_validator.core.syntax import check_syntax

__all__ = [
    "Document",
    "Report",
    "ValidationResult",
    "aggregate",
    "check_syntax",
    "discover",
]
