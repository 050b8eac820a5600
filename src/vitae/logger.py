"""
Logging setup for vitae.

Configures loguru sinks and provides helpers with an automatic [vitae] prefix.
Modules log through the helpers here rather than calling loguru directly.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[vitae]"


def setup_logger(verbose: bool = False, log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Configure loguru for console output and an optional log file.

    Args:
        verbose: Show DEBUG messages on the console (default: INFO and above)
        log_dir: Directory for a DEBUG-level ``vitae.log`` file (default: no file)

    Returns:
        Path to the log file, or None when no file sink was added
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
        colorize=True,
    )

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "vitae.log"
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )
    return log_file


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_compilation_start(doc_id: str, compiler: str, workspace_root: Path) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling {doc_id}")
    _log_debug(f"  Compiler: {compiler}")
    _log_debug(f"  Workspace: {workspace_root}")


def log_compilation_result(doc_id: str, result, elapsed_time: float) -> None:
    """
    Log compilation outcome with diagnostic counts.

    Args:
        doc_id: Document identifier
        result: CompileResult from compile_document()
        elapsed_time: Time taken to compile, in seconds
    """
    errors = [d for d in result.diagnostics if d.severity == "error"]
    warnings = [d for d in result.diagnostics if d.severity == "warning"]

    if result.success:
        _log_success(f"{doc_id}: compiled with {len(warnings)} warnings ({elapsed_time:.2f}s)")
    else:
        _log_error(f"{doc_id}: compilation failed with {len(errors)} errors ({elapsed_time:.2f}s)")

    for diag in result.diagnostics:
        where = f"line {diag.line}" if diag.line else "-"
        _log_debug(f"  {diag.severity} ({where}): {diag.message}")

    if not result.success and result.log:
        # raw keeps multi-line compiler output free of per-line prefixes
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER OUTPUT:\n{'=' * 80}\n{result.log}\n")
