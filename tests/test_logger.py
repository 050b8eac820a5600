"""Tests for logging setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from vitae.logger import log_compilation_result, setup_logger
from vitae.models import CompileResult, Diagnostic


@pytest.fixture
def log_file(tmp_path: Path):
    path = setup_logger(log_dir=tmp_path / "logs")
    yield path
    logger.remove()


def test_setup_without_file() -> None:
    assert setup_logger() is None
    logger.remove()


def test_compilation_result_logged(log_file: Path) -> None:
    result = CompileResult(
        success=False,
        diagnostics=[Diagnostic(severity="error", message="Emergency stop.")],
        log="! Emergency stop.",
    )

    log_compilation_result("doc", result, elapsed_time=0.5)
    # Removing the sinks closes and flushes the file
    logger.remove()

    text = log_file.read_text()
    assert "[vitae] doc: compilation failed with 1 errors" in text
    assert "error (-): Emergency stop." in text
    assert "COMPILER OUTPUT" in text
