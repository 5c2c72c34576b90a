import json
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PROCESSING,
    DocumentRecord,
)
from app.ingestion.exceptions import DocumentNotFoundError, InvalidStatusTransitionError

DOCUMENT_CHANNEL = "journal_documents"

_COLUMNS = """
    id, user_id, file_name, file_type, file_size, file_path, public_url,
    status, parsed_content, parsed_html, metadata, created_at, updated_at
"""


class DocumentsRepository:
    """Database operations for the journal_documents table.

    Status only moves forward: every update is guarded by
    `status = 'processing'`, and each accepted transition is announced on the
    `journal_documents` notification channel inside the same transaction.
    """

    def create(
        self,
        *,
        owner_id: str,
        file_name: str,
        file_type: str,
        file_size: int,
        file_path: str,
        public_url: str,
    ) -> DocumentRecord:
        """Insert a new document row in `processing` status."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO journal_documents
                    (user_id, file_name, file_type, file_size, file_path, public_url, status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        owner_id,
                        file_name,
                        file_type,
                        file_size,
                        file_path,
                        public_url,
                        STATUS_PROCESSING,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return _to_record(row)

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM journal_documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def list_for_owner(self, owner_id: str, limit: int = 50) -> list[DocumentRecord]:
        """Return the owner's documents, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM journal_documents
                    WHERE user_id = %s
                    ORDER BY created_at DESC
                    LIMIT %s
                    """,
                    (owner_id, limit),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def mark_completed(
        self,
        document_id: str,
        *,
        parsed_content: str,
        parsed_html: str,
        metadata: dict[str, Any],
    ) -> None:
        """Persist the provider output and move the document to `completed`.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            InvalidStatusTransitionError: if the document is already terminal.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE journal_documents
                    SET status = %s,
                        parsed_content = %s,
                        parsed_html = %s,
                        metadata = %s,
                        updated_at = NOW()
                    WHERE id = %s AND status = %s
                    """,
                    (
                        STATUS_COMPLETED,
                        parsed_content,
                        parsed_html,
                        Jsonb(metadata),
                        document_id,
                        STATUS_PROCESSING,
                    ),
                )
                if cur.rowcount == 0:
                    conn.rollback()
                    self._raise_for_rejected_update(conn, document_id, STATUS_COMPLETED)
                _notify(cur, document_id, STATUS_COMPLETED)
            conn.commit()

    def mark_failed(self, document_id: str, error: str) -> None:
        """Move the document to `failed`, keeping the reason in metadata.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            InvalidStatusTransitionError: if the document is already terminal.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE journal_documents
                    SET status = %s, metadata = %s, updated_at = NOW()
                    WHERE id = %s AND status = %s
                    """,
                    (
                        STATUS_FAILED,
                        Jsonb({"error": error}),
                        document_id,
                        STATUS_PROCESSING,
                    ),
                )
                if cur.rowcount == 0:
                    conn.rollback()
                    self._raise_for_rejected_update(conn, document_id, STATUS_FAILED)
                _notify(cur, document_id, STATUS_FAILED)
            conn.commit()

    @staticmethod
    def _raise_for_rejected_update(
        conn: psycopg.Connection[Any], document_id: str, target: str
    ) -> None:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT status FROM journal_documents WHERE id = %s",
                (document_id,),
            )
            row = cur.fetchone()
        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        raise InvalidStatusTransitionError(
            f"Document {document_id} is already {row[0]}, cannot move to {target}"
        )


def _notify(cur: psycopg.Cursor[Any], document_id: str, status: str) -> None:
    payload = json.dumps({"id": str(document_id), "status": status})
    cur.execute("SELECT pg_notify(%s, %s)", (DOCUMENT_CHANNEL, payload))


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        owner_id=str(row["user_id"]),
        file_name=row["file_name"],
        file_type=row["file_type"],
        file_size=row["file_size"],
        file_path=row["file_path"],
        public_url=row["public_url"],
        status=row["status"],
        parsed_content=row["parsed_content"],
        parsed_html=row["parsed_html"],
        metadata=row["metadata"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
