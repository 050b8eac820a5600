"""Data models for vitae documents, compilation results and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

Severity = Literal["error", "warning"]


@dataclass
class Diagnostic:
    """A diagnostic message extracted from compiler output."""

    severity: Severity
    message: str
    line: Optional[int] = None
    file: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert diagnostic to a dictionary for JSON serialization."""
        return {
            "severity": self.severity,
            "message": self.message,
            "line": self.line,
            "file": self.file,
        }


@dataclass
class CompilerConfig:
    """Configuration threaded through every compilation operation."""

    workspace_root: Path
    compiler: str = "pdflatex"
    # None means wait for the compiler indefinitely
    timeout: Optional[float] = None


@dataclass
class CompileResult:
    """Result of a single compilation attempt."""

    success: bool
    artifact_path: Optional[str] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    log: str = ""
    return_code: Optional[int] = None

    @property
    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    def to_dict(self) -> dict:
        """Convert result to a dictionary for JSON serialization."""
        return {
            "success": self.success,
            "artifact_path": self.artifact_path,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "log": self.log,
            "return_code": self.return_code,
        }


@dataclass
class Document:
    """A stored LaTeX document."""

    id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
