"""Document model: one JSON file read once and parsed on demand."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import orjson

from json_validator.exceptions import DocumentReadError, DocumentSyntaxError

_UNPARSED = object()


@dataclass(slots=True)
class Document:
    """A JSON document on disk.

    Attributes:
        path: Absolute path of the file
        content: Text content, None when the file could not be read
        read_error: Description of the read failure, if any

    """

    path: Path
    content: str | None = None
    read_error: str | None = None
    _parsed: Any = field(default=_UNPARSED, repr=False, compare=False)

    @classmethod
    def load(cls, path: Path | str) -> Document:
        """Read a document from disk.

        Never raises: missing files, permission problems and invalid
        UTF-8 are recorded in ``read_error``.

        Args:
            path: File path, made absolute against the current directory

        Returns:
            Loaded document

        """
        path = Path(path).absolute()
        try:
            content = path.read_bytes().decode("utf-8")
        except OSError as e:
            return cls(path=path, read_error=str(e))
        except UnicodeDecodeError as e:
            return cls(
                path=path,
                read_error=(
                    f"not valid UTF-8 text ({e.reason} at byte {e.start})"
                ),
            )
        return cls(path=path, content=content)

    @property
    def readable(self) -> bool:
        """Whether the file content is available."""
        return self.read_error is None

    def parse(self) -> Any:
        """Return the parsed JSON value, parsing at most once.

        Returns:
            Parsed value (dict, list, str, int, float, bool or None)

        Raises:
            DocumentReadError: If the file could not be read
            DocumentSyntaxError: If the content is not valid JSON

        """
        if self._parsed is not _UNPARSED:
            return self._parsed
        if self.read_error is not None:
            raise DocumentReadError(self.read_error)

        try:
            self._parsed = orjson.loads(self.content or "")
        except orjson.JSONDecodeError as e:
            raise DocumentSyntaxError(str(e)) from e
        return self._parsed


def as_document(source: Document | Path | str) -> Document:
    """Return ``source`` as a Document, loading it if given a path."""
    if isinstance(source, Document):
        return source
    return Document.load(source)
