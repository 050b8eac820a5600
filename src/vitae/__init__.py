"""vitae: keep LaTeX documents and compile them to PDF with structured diagnostics."""

from __future__ import annotations

from vitae.core import check_compiler_available, compile_document, export_artifact
from vitae.models import CompileResult, CompilerConfig, Diagnostic, Document
from vitae.store import DocumentStore

__version__ = "0.1.0"
__all__ = [
    "check_compiler_available",
    "compile_document",
    "export_artifact",
    "CompileResult",
    "CompilerConfig",
    "Diagnostic",
    "Document",
    "DocumentStore",
]
