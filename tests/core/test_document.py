"""Tests for the Document model."""

from pathlib import Path

import pytest

from json_validator.core.document import Document, as_document
from json_validator.exceptions import DocumentReadError, DocumentSyntaxError


def test_load_reads_content(write_file) -> None:
    path = write_file("doc.json", '{"a": 1}')

    document = Document.load(path)

    assert document.readable
    assert document.content == '{"a": 1}'
    assert document.path == path


def test_load_makes_path_absolute(
    write_file, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("doc.json", "{}")
    monkeypatch.chdir(tmp_path)

    document = Document.load("doc.json")

    assert document.path == tmp_path / "doc.json"


def test_load_missing_file_records_error(tmp_path: Path) -> None:
    document = Document.load(tmp_path / "missing.json")

    assert not document.readable
    assert "No such file" in document.read_error


def test_load_invalid_utf8_records_error(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"name": "caf\xe9"}')

    document = Document.load(path)

    assert not document.readable
    assert "UTF-8" in document.read_error


def test_parse_returns_value_and_caches(write_file) -> None:
    document = Document.load(write_file("doc.json", '{"items": [1, 2]}'))

    first = document.parse()

    assert first == {"items": [1, 2]}
    assert document.parse() is first


def test_parse_raises_syntax_error(write_file) -> None:
    document = Document.load(write_file("doc.json", '{"a": }'))

    with pytest.raises(DocumentSyntaxError) as exc_info:
        document.parse()

    assert str(exc_info.value).startswith("Invalid JSON syntax:")


@pytest.mark.parametrize(
    "content",
    [
        '{"a": 1,}',
        "// comment\n{}",
        "{'a': 1}",
        '{"a": NaN}',
        "",
    ],
)
def test_parse_is_strict(content: str, tmp_path: Path) -> None:
    document = Document(path=tmp_path / "x.json", content=content)

    with pytest.raises(DocumentSyntaxError):
        document.parse()


def test_parse_unreadable_raises_read_error(tmp_path: Path) -> None:
    document = Document.load(tmp_path / "missing.json")

    with pytest.raises(DocumentReadError) as exc_info:
        document.parse()

    assert str(exc_info.value).startswith("Failed to read file:")


def test_as_document_passes_documents_through(tmp_path: Path) -> None:
    document = Document(path=tmp_path / "x.json", content="{}")

    assert as_document(document) is document
