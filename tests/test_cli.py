"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from vitae.cli import app

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point vitae at an isolated data directory."""
    data = tmp_path / "data"
    monkeypatch.setenv("VITAE_DATA_DIR", str(data))
    monkeypatch.delenv("VITAE_COMPILER", raising=False)
    monkeypatch.delenv("VITAE_TIMEOUT", raising=False)
    return data


@pytest.fixture(autouse=True)
def quiet_logger():
    with patch("vitae.cli.setup_logger"):
        yield


def _new_document(title: str = "Thesis") -> str:
    result = runner.invoke(app, ["new", title])
    assert result.exit_code == 0
    return result.output.strip()


def _fake_pdflatex(data_dir: Path, doc_id: str, stdout: str = "", make_pdf: bool = True) -> Mock:
    def run(cmd, **_):
        if make_pdf:
            (data_dir / "temp" / f"{doc_id}.pdf").write_bytes(b"%PDF-1.4")
        mock_result = MagicMock()
        mock_result.returncode = 0 if make_pdf else 1
        mock_result.stdout = stdout
        mock_result.stderr = ""
        return mock_result

    return Mock(side_effect=run)


def test_new_list_show(data_dir: Path) -> None:
    """Test creating, listing and showing a document."""
    doc_id = _new_document("My Thesis")

    listing = runner.invoke(app, ["list"])
    assert listing.exit_code == 0
    assert doc_id in listing.output
    assert "My Thesis" in listing.output

    shown = runner.invoke(app, ["show", doc_id])
    assert shown.exit_code == 0
    assert r"\title{My Thesis}" in shown.output


def test_edit_and_delete(data_dir: Path, tmp_path: Path) -> None:
    """Test replacing a document's source from a file, then deleting it."""
    doc_id = _new_document()
    source = tmp_path / "new.tex"
    source.write_text(r"\documentclass{article}", encoding="utf-8")

    edited = runner.invoke(app, ["edit", doc_id, str(source)])
    assert edited.exit_code == 0
    assert runner.invoke(app, ["show", doc_id]).output.strip() == r"\documentclass{article}"

    deleted = runner.invoke(app, ["delete", doc_id])
    assert deleted.exit_code == 0
    missing = runner.invoke(app, ["show", doc_id])
    assert missing.exit_code == 1
    assert "Document not found" in missing.output


def test_compile_json_success(data_dir: Path) -> None:
    """Test a successful compile with JSON output."""
    doc_id = _new_document()

    with patch("vitae.core.subprocess.run", _fake_pdflatex(data_dir, doc_id)):
        result = runner.invoke(app, ["compile", doc_id, "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["success"] is True
    assert payload["artifact_path"].endswith(f"temp/{doc_id}.pdf")
    assert payload["diagnostics"] == []


def test_compile_failure(data_dir: Path) -> None:
    """Test that a failed compile prints diagnostics and exits with 2."""
    doc_id = _new_document()
    fake_run = _fake_pdflatex(
        data_dir, doc_id, stdout="./x.tex:4: Undefined control sequence.", make_pdf=False
    )

    with patch("vitae.core.subprocess.run", fake_run):
        result = runner.invoke(app, ["compile", doc_id])

    assert result.exit_code == 2
    assert "Compilation failed." in result.output
    assert "ERROR (line 4): Undefined control sequence." in result.output


def test_compile_unknown_document(data_dir: Path) -> None:
    """Test compiling an id that is not in the store."""
    result = runner.invoke(app, ["compile", "missing"])
    assert result.exit_code == 1
    assert "Document not found" in result.output


@patch("vitae.core.subprocess.run")
def test_compile_compiler_missing(mock_subprocess: Mock, data_dir: Path) -> None:
    """Test that a missing compiler is reported with an install hint."""
    doc_id = _new_document()
    mock_subprocess.side_effect = FileNotFoundError()

    result = runner.invoke(app, ["compile", doc_id])

    assert result.exit_code == 1
    assert "installed" in result.output


def test_export_requires_compile(data_dir: Path, tmp_path: Path) -> None:
    """Test that export before compile fails without copying."""
    doc_id = _new_document()
    destination = tmp_path / "out.pdf"

    result = runner.invoke(app, ["export", doc_id, str(destination)])

    assert result.exit_code == 1
    assert "Please compile first" in result.output
    assert not destination.exists()


def test_export_after_compile(data_dir: Path, tmp_path: Path) -> None:
    """Test exporting the PDF produced by a compile."""
    doc_id = _new_document()
    destination = tmp_path / "out.pdf"

    with patch("vitae.core.subprocess.run", _fake_pdflatex(data_dir, doc_id)):
        assert runner.invoke(app, ["compile", doc_id]).exit_code == 0

    result = runner.invoke(app, ["export", doc_id, str(destination)])
    assert result.exit_code == 0
    assert destination.read_bytes() == b"%PDF-1.4"


@pytest.mark.parametrize("available, exit_code", [(True, 0), (False, 1)])
def test_doctor(data_dir: Path, available: bool, exit_code: int) -> None:
    """Test the compiler availability check."""
    with patch("vitae.cli.check_compiler_available", return_value=available):
        result = runner.invoke(app, ["doctor"])

    assert result.exit_code == exit_code
    if not available:
        assert "miktex.org" in result.output


def test_verbose_configures_logging_for_every_command(data_dir: Path) -> None:
    """Test that logging is set up once, before any command runs."""
    with patch("vitae.cli.setup_logger") as setup:
        result = runner.invoke(app, ["--verbose", "list"])

    assert result.exit_code == 0
    setup.assert_called_once_with(verbose=True)
