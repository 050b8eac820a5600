"""Per-document compilation workspace management."""

from __future__ import annotations

from pathlib import Path

from vitae.exceptions import WorkspaceError
from vitae.logger import _log_debug, _log_warning

# Auxiliary files pdflatex leaves next to the PDF
AUXILIARY_EXTENSIONS = [".aux", ".log", ".out"]


def ensure_workspace(root: Path) -> Path:
    """Create the workspace root if it does not exist yet.

    Raises:
        WorkspaceError: If the directory cannot be created
    """
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(f"Failed to create workspace directory ({e})", root) from e
    return root


def check_doc_id(doc_id: str) -> str:
    """Reject document ids that would name a file outside the workspace root.

    Raises:
        WorkspaceError: If the id is empty or contains a path component
    """
    if not doc_id or doc_id in (".", "..") or any(sep in doc_id for sep in "/\\:"):
        raise WorkspaceError(f"Invalid document id {doc_id!r}")
    return doc_id


def source_path(root: Path, doc_id: str) -> Path:
    return root / f"{check_doc_id(doc_id)}.tex"


def pdf_path(root: Path, doc_id: str) -> Path:
    return root / f"{check_doc_id(doc_id)}.pdf"


def generated_paths(root: Path, doc_id: str) -> list[Path]:
    """Files produced by a compilation: the PDF followed by auxiliary files."""
    check_doc_id(doc_id)
    return [pdf_path(root, doc_id)] + [root / f"{doc_id}{ext}" for ext in AUXILIARY_EXTENSIONS]


def clean_artifacts(root: Path, doc_id: str) -> list[Path]:
    """Remove the PDF and auxiliary files left by a previous attempt.

    Deletion is best-effort: missing files are ignored and files that cannot
    be removed are logged and left in place.

    Args:
        root: Workspace root directory
        doc_id: Document identifier

    Returns:
        The paths that were actually removed
    """
    removed = []
    for path in generated_paths(root, doc_id):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            _log_warning(f"Could not remove stale file {path}: {e}")
            continue
        removed.append(path)

    if removed:
        _log_debug(f"Removed {len(removed)} stale files for {doc_id}")
    return removed
