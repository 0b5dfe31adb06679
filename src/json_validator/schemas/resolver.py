"""Per-document schema resolution.

A global schema always wins. Without one, a document may name its own
schema through a top-level ``$schema`` string; local references are
resolved against the document's directory, remote URLs are ignored.
"""

from __future__ import annotations

import os
from pathlib import Path

from json_validator.constants import REMOTE_SCHEMA_PREFIXES, SCHEMA_KEY
from json_validator.core.document import Document
from json_validator.exceptions import DocumentError
from json_validator.logger import get_logger

logger = get_logger(__name__)


def _local_reference(value: object, document_path: Path) -> Path | None:
    if not isinstance(value, str):
        return None
    if value.startswith(REMOTE_SCHEMA_PREFIXES):
        logger.debug(
            "Ignoring remote schema %s declared by %s", value, document_path
        )
        return None
    # Lexical normalization only; the target may not exist
    return Path(os.path.abspath(document_path.parent / value))


def extract_schema_reference(
    content: str, document_path: Path | str
) -> Path | None:
    """Extract a local schema reference from raw document text.

    Args:
        content: Raw JSON text of the document
        document_path: Path of the document the text came from

    Returns:
        Absolute schema path, or None for no reference, a remote URL,
        a non-string value, a non-object root or unparseable content

    """
    document = Document(path=Path(document_path).absolute(), content=content)
    return resolve_schema_for(document, None)


def resolve_schema_for(
    document: Document, global_schema_path: Path | str | None
) -> Path | None:
    """Decide which schema applies to ``document``.

    The returned path is not checked for existence; callers treat a
    missing self-declared schema as "no schema".

    Args:
        document: Loaded document
        global_schema_path: Global schema override, if configured

    Returns:
        Absolute schema path, or None for syntax-only validation

    """
    if global_schema_path:
        return Path(os.path.abspath(global_schema_path))

    try:
        data = document.parse()
    except DocumentError:
        # Reported by the validation step, not here
        return None

    if not isinstance(data, dict) or SCHEMA_KEY not in data:
        return None
    return _local_reference(data[SCHEMA_KEY], document.path)
