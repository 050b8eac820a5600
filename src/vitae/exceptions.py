"""Exceptions raised by vitae operations.

Compilation failures are not exceptions: they are reported as a
``CompileResult`` with ``success=False``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class VitaeError(Exception):
    """Base class for all vitae errors."""


class CompilerNotFoundError(VitaeError):
    """
    Raised when the LaTeX compiler process cannot be started.

    Attributes:
        compiler: Name of the compiler executable
        original_error: The OS error raised while spawning the process
    """

    def __init__(self, compiler: str, original_error: Optional[Exception] = None):
        self.compiler = compiler
        self.original_error = original_error

        parts = [
            f"Failed to run {compiler}. "
            f"Make sure {compiler} is installed and in PATH "
            "(install a LaTeX distribution such as TeX Live or MiKTeX)."
        ]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class WorkspaceError(VitaeError):
    """
    Raised when the workspace directory or source file cannot be written.

    Attributes:
        message: Error description
        path: The path that could not be created or written
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


class ArtifactNotFoundError(VitaeError):
    """Raised when exporting a document that has no compiled PDF yet."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__("PDF not found. Please compile first.")


class ExportError(VitaeError):
    """Raised when copying a compiled PDF to its destination fails."""


class DocumentNotFoundError(VitaeError):
    """Raised when a document id is not present in the store."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(f"Document not found: {doc_id}")
