"""Core compilation logic for vitae."""

from __future__ import annotations

import shutil
import subprocess
import time
from pathlib import Path
from typing import Optional, Union

from vitae.analysis import analyse_log
from vitae.exceptions import (
    ArtifactNotFoundError,
    CompilerNotFoundError,
    ExportError,
    WorkspaceError,
)
from vitae.logger import _log_debug, _log_info, log_compilation_result, log_compilation_start
from vitae.models import CompileResult, CompilerConfig, Diagnostic
from vitae.workspace import check_doc_id, clean_artifacts, ensure_workspace, pdf_path, source_path

MISSING_ARTIFACT_MESSAGE = "artifact was not generated"


def write_source(root: Path, doc_id: str, content: str) -> Path:
    """Write the document source to ``<id>.tex`` in the workspace.

    The file is flushed and closed before returning so the compiler never
    sees a partial write.

    Raises:
        WorkspaceError: If the file cannot be written
    """
    tex_path = source_path(root, doc_id)
    try:
        with open(tex_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
    except OSError as e:
        raise WorkspaceError(f"Failed to write tex file ({e})", tex_path) from e
    return tex_path


def _build_command(config: CompilerConfig, tex_path: Path) -> list[str]:
    # Build command: pdflatex -interaction=nonstopmode -file-line-error -output-directory ROOT input.tex
    # Paths are absolute because the compiler runs with the workspace as its cwd
    return [
        config.compiler,
        "-interaction=nonstopmode",
        "-file-line-error",
        "-output-directory",
        str(config.workspace_root.resolve()),
        str(tex_path.resolve()),
    ]


def run_compiler(config: CompilerConfig, tex_path: Path) -> tuple[int, str]:
    """Run the LaTeX compiler on a source file and wait for it to exit.

    Args:
        config: Compiler configuration
        tex_path: Path to the .tex file inside the workspace

    Returns:
        Tuple of (return_code, stdout)

    Raises:
        CompilerNotFoundError: If the compiler process cannot be started
        subprocess.TimeoutExpired: If ``config.timeout`` is set and exceeded
    """
    cmd = _build_command(config, tex_path)
    _log_debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=config.timeout,
            cwd=config.workspace_root.resolve(),
        )
    except OSError as e:
        raise CompilerNotFoundError(config.compiler, e) from e

    # Diagnostics are printed on stdout; stderr is not part of the log
    return result.returncode, result.stdout or ""


def check_compiler_available(config: CompilerConfig) -> bool:
    """Return True if the compiler can be started with ``--version``."""
    try:
        subprocess.run(
            [config.compiler, "--version"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return False
    return True


def _assemble_result(
    artifact: Path,
    diagnostics: list[Diagnostic],
    log: str,
    return_code: Optional[int],
) -> CompileResult:
    if not artifact.exists():
        if not diagnostics:
            diagnostics.append(Diagnostic(severity="error", message=MISSING_ARTIFACT_MESSAGE))
        return CompileResult(
            success=False,
            diagnostics=diagnostics,
            log=log,
            return_code=return_code,
        )

    result = CompileResult(
        success=False,
        artifact_path=artifact.as_posix(),
        diagnostics=diagnostics,
        log=log,
        return_code=return_code,
    )
    # Warnings alone do not fail the build, whatever the exit code says
    result.success = not result.has_errors
    return result


def compile_document(config: CompilerConfig, doc_id: str, content: str) -> CompileResult:
    """Compile a document's source into a PDF in the workspace.

    Args:
        config: Compiler configuration (workspace root, compiler, timeout)
        doc_id: Document identifier, used to name workspace files
        content: Full LaTeX source of the document

    Returns:
        CompileResult with verdict, PDF path and diagnostics. Compilation
        failures are reported here rather than raised.

    Raises:
        WorkspaceError: If the id is invalid or the workspace or source file
            cannot be written
        CompilerNotFoundError: If the compiler cannot be started
    """
    check_doc_id(doc_id)
    root = config.workspace_root.resolve()
    log_compilation_start(doc_id, config.compiler, root)
    start_time = time.time()

    _log_debug(f"{doc_id}: cleaning")
    ensure_workspace(root)
    clean_artifacts(root, doc_id)

    _log_debug(f"{doc_id}: writing {len(content)} characters")
    tex_path = write_source(root, doc_id, content)

    _log_debug(f"{doc_id}: invoking {config.compiler}")
    try:
        return_code, log = run_compiler(config, tex_path)
        _log_debug(f"{doc_id}: parsing output (exit code {return_code})")
        diagnostics = analyse_log(log)
    except subprocess.TimeoutExpired:
        return_code, log = None, ""
        diagnostics = [
            Diagnostic(
                severity="error",
                message=f"compilation timed out after {config.timeout} seconds",
            )
        ]

    result = _assemble_result(pdf_path(root, doc_id), diagnostics, log, return_code)

    log_compilation_result(doc_id, result, time.time() - start_time)
    return result


def export_artifact(
    config: CompilerConfig,
    doc_id: str,
    destination: Union[str, Path],
) -> Path:
    """Copy the most recent PDF for a document to a destination.

    Args:
        config: Compiler configuration
        doc_id: Document identifier
        destination: Target file path, or an existing directory

    Returns:
        Path of the copied file

    Raises:
        WorkspaceError: If the id names a path outside the workspace
        ArtifactNotFoundError: If the document has not been compiled yet
        ExportError: If the copy fails
    """
    source_pdf = pdf_path(config.workspace_root, doc_id)
    if not source_pdf.exists():
        raise ArtifactNotFoundError(doc_id)

    try:
        copied = shutil.copy(source_pdf, destination)
    except OSError as e:
        raise ExportError(f"Failed to export PDF: {e}") from e

    _log_info(f"PDF exported to: {copied}")
    return Path(copied)
