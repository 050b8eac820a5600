"""CLI interface for vitae."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from typing import Annotated

import typer

from vitae.config import load_config
from vitae.core import check_compiler_available, compile_document, export_artifact
from vitae.exceptions import VitaeError
from vitae.logger import setup_logger
from vitae.models import CompileResult
from vitae.store import DocumentStore

app = typer.Typer(
    name="vitae",
    help="Keep LaTeX documents and compile them to PDF with structured diagnostics",
)

INSTALL_HINTS = [
    "Windows: install MiKTeX from https://miktex.org/download",
    "macOS: install MacTeX from https://tug.org/mactex/",
    "Linux: install TeX Live, e.g. `sudo apt install texlive-latex-base`",
]


def _fail(message: str, code: int = 1) -> None:
    typer.echo(f"Error: {message}", err=True)
    sys.exit(code)


def _open_store() -> DocumentStore:
    return DocumentStore(load_config().db_path)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    setup_logger(verbose=verbose)


def _print_diagnostics(result: CompileResult) -> None:
    """Print diagnostics in human-readable format."""
    for diag in result.diagnostics:
        marker = "ERROR" if diag.severity == "error" else "WARNING"
        location = f" (line {diag.line})" if diag.line else ""
        typer.echo(f"{marker}{location}: {diag.message}", err=True)


@app.command("new")
def new_document(
    title: Annotated[str, typer.Argument(help="Title of the new document")],
) -> None:
    """Create a document from the default article template."""
    with _open_store() as store:
        document = store.create(title)
    typer.echo(document.id)


@app.command("list")
def list_documents() -> None:
    """List documents, most recently updated first."""
    with _open_store() as store:
        documents = store.list()
    for document in documents:
        typer.echo(f"{document.id}  {document.updated_at}  {document.title}")


@app.command("show")
def show_document(
    doc_id: Annotated[str, typer.Argument(help="Document id")],
) -> None:
    """Print a document's LaTeX source."""
    try:
        with _open_store() as store:
            document = store.get(doc_id)
    except VitaeError as e:
        _fail(str(e))
    typer.echo(document.content)


@app.command("edit")
def edit_document(
    doc_id: Annotated[str, typer.Argument(help="Document id")],
    source: Annotated[
        Path,
        typer.Argument(help="File whose contents replace the document source"),
    ],
) -> None:
    """Replace a document's source with the contents of a file."""
    if not source.is_file():
        _fail(f"Input file not found: {source}")
    try:
        with _open_store() as store:
            store.update(doc_id, source.read_text(encoding="utf-8"))
    except VitaeError as e:
        _fail(str(e))
    typer.echo(f"Updated {doc_id}")


@app.command("delete")
def delete_document(
    doc_id: Annotated[str, typer.Argument(help="Document id")],
) -> None:
    """Delete a document."""
    try:
        with _open_store() as store:
            store.delete(doc_id)
    except VitaeError as e:
        _fail(str(e))
    typer.echo(f"Deleted {doc_id}")


@app.command("compile")
def compile_command(
    doc_id: Annotated[str, typer.Argument(help="Document id")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output result as JSON"),
    ] = False,
) -> None:
    """Compile a stored document to PDF.

    Examples:
        vitae compile 3f2a...
        vitae compile 3f2a... --json
    """
    settings = load_config()

    try:
        with DocumentStore(settings.db_path) as store:
            document = store.get(doc_id)
        result = compile_document(settings.compiler_config(), document.id, document.content)
    except VitaeError as e:
        _fail(str(e))

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.success else 2)

    if result.success and result.artifact_path:
        typer.echo(f"OK: {result.artifact_path}")
        _print_diagnostics(result)
        sys.exit(0)
    else:
        typer.echo("Compilation failed.", err=True)
        _print_diagnostics(result)
        sys.exit(2)


@app.command("export")
def export_command(
    doc_id: Annotated[str, typer.Argument(help="Document id")],
    destination: Annotated[Path, typer.Argument(help="Destination file or directory")],
) -> None:
    """Copy the most recently compiled PDF of a document."""
    try:
        copied = export_artifact(load_config().compiler_config(), doc_id, destination)
    except VitaeError as e:
        _fail(str(e))
    typer.echo(f"Exported: {copied}")


@app.command("doctor")
def doctor() -> None:
    """Check that the LaTeX compiler can be run."""
    settings = load_config()
    compiler = settings.compiler
    if check_compiler_available(settings.compiler_config()):
        typer.echo(f"OK: {compiler} is available")
        return

    typer.echo(f"{compiler} was not found on PATH. Install a LaTeX distribution:", err=True)
    for hint in INSTALL_HINTS:
        typer.echo(f"  - {hint}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    app()
