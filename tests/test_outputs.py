"""Tests for run reporting and GitHub Actions outputs."""

import json
import logging
from pathlib import Path

import pytest

from json_validator.core.results import Report
from json_validator.outputs import (
    log_report,
    render_json,
    report_outputs,
    write_outputs,
)


@pytest.fixture
def mixed_report(tmp_path: Path) -> Report:
    return Report(
        valid_count=2,
        invalid_count=1,
        errors=((tmp_path / "data" / "bad.json", "$.price -1 is bad"),),
    )


def test_report_outputs(mixed_report: Report) -> None:
    assert report_outputs(mixed_report) == {
        "valid-files": 2,
        "invalid-files": 1,
    }


def test_write_outputs_appends(tmp_path: Path) -> None:
    output_file = tmp_path / "out.txt"
    output_file.write_text("earlier=step\n", encoding="utf-8")

    written = write_outputs(
        {"valid-files": 3, "invalid-files": 0},
        environ={"GITHUB_OUTPUT": str(output_file)},
    )

    assert written == output_file
    assert output_file.read_text(encoding="utf-8") == (
        "earlier=step\nvalid-files=3\ninvalid-files=0\n"
    )


def test_write_outputs_outside_actions() -> None:
    assert write_outputs({"valid-files": 1}, environ={}) is None


def test_log_report_lists_invalid_files(
    mixed_report: Report, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)

    log_report(mixed_report, cwd=tmp_path)

    assert "Validation Results:" in caplog.text
    assert "✓ Valid files: 2" in caplog.text
    assert "✗ Invalid files: 1" in caplog.text
    assert "  - data/bad.json: $.price -1 is bad" in caplog.text
    assert "All JSON files are valid" not in caplog.text


def test_log_report_all_valid(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    log_report(Report(valid_count=4, invalid_count=0))

    assert "✓ All JSON files are valid!" in caplog.text
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_log_report_empty_run_is_silent(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG)

    log_report(Report(valid_count=0, invalid_count=0))

    assert "Validation Results" not in caplog.text


def test_render_json(mixed_report: Report, tmp_path: Path) -> None:
    payload = json.loads(render_json(mixed_report))

    assert payload == {
        "valid-files": 2,
        "invalid-files": 1,
        "errors": [
            {
                "file": str(tmp_path / "data" / "bad.json"),
                "error": "$.price -1 is bad",
            }
        ],
    }
