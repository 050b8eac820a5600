"""
Persistent SQLite store for vitae documents.

Keeps one row per document (title, LaTeX source and timestamps). The compiler
only needs the document id and current content; everything else lives here.
"""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from vitae.exceptions import DocumentNotFoundError
from vitae.models import Document

DEFAULT_TEMPLATE = r"""\documentclass{article}
\usepackage[utf8]{inputenc}

\title{%TITLE%}
\author{}
\date{\today}

\begin{document}

\maketitle

\section{Introduction}

Start writing your document here...

\end{document}"""

_COLUMNS = "id, title, content, created_at, updated_at"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_document(row: sqlite3.Row) -> Document:
    return Document(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentStore:
    """
    SQLite-backed document repository.

    The database file and its schema are created on first use.
    """

    def __init__(self, db_path: Path):
        """
        Open (or create) the document database.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "DocumentStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def list(self) -> list[Document]:
        """Return all documents, most recently updated first."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM documents ORDER BY updated_at DESC"
        ).fetchall()
        return [_row_to_document(row) for row in rows]

    def create(self, title: str) -> Document:
        """
        Create a document pre-filled with the default article template.

        Args:
            title: Document title, also substituted into ``\\title{...}``

        Returns:
            The newly stored Document
        """
        now = _now()
        document = Document(
            id=str(uuid.uuid4()),
            title=title,
            content=DEFAULT_TEMPLATE.replace("%TITLE%", title),
            created_at=now,
            updated_at=now,
        )
        self.conn.execute(
            f"INSERT INTO documents ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                document.id,
                document.title,
                document.content,
                document.created_at,
                document.updated_at,
            ),
        )
        self.conn.commit()
        return document

    def get(self, doc_id: str) -> Document:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM documents WHERE id = ?", (doc_id,)
        ).fetchone()
        if row is None:
            raise DocumentNotFoundError(doc_id)
        return _row_to_document(row)

    def update(self, doc_id: str, content: str) -> None:
        """Replace a document's content and refresh its ``updated_at``."""
        cursor = self.conn.execute(
            "UPDATE documents SET content = ?, updated_at = ? WHERE id = ?",
            (content, _now(), doc_id),
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise DocumentNotFoundError(doc_id)

    def delete(self, doc_id: str) -> None:
        cursor = self.conn.execute("DELETE FROM documents WHERE id = ?", (doc_id,))
        self.conn.commit()
        if cursor.rowcount == 0:
            raise DocumentNotFoundError(doc_id)
