from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.models import JournalEntryRecord


@dataclass(frozen=True)
class _LabelTables:
    vocabulary: str
    join: str
    foreign_key: str


class LabelKind(Enum):
    """Label vocabularies linked to journal entries."""

    EMOTION = _LabelTables("emotions", "entry_emotions", "emotion_id")
    THEME = _LabelTables("themes", "entry_themes", "theme_id")


_SELECT_ENTRIES = """
    SELECT e.id, e.user_id, e.content, e.mood_score, e.analysis_data, e.created_at,
           COALESCE(
               (SELECT array_agg(em.name ORDER BY em.name)
                FROM entry_emotions ee JOIN emotions em ON em.id = ee.emotion_id
                WHERE ee.entry_id = e.id),
               ARRAY[]::text[]
           ) AS emotions,
           COALESCE(
               (SELECT array_agg(th.name ORDER BY th.name)
                FROM entry_themes et JOIN themes th ON th.id = et.theme_id
                WHERE et.entry_id = e.id),
               ARRAY[]::text[]
           ) AS themes
    FROM journal_entries e
"""


class JournalEntriesRepository:
    """Database operations for journal_entries and its label vocabularies."""

    def insert_entry(
        self,
        *,
        owner_id: str,
        content: str,
        mood_score: float,
        analysis_data: dict[str, Any],
    ) -> JournalEntryRecord:
        """Insert a journal entry and return it with its generated id."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO journal_entries (user_id, content, mood_score, analysis_data)
                    VALUES (%s, %s, %s, %s)
                    RETURNING id, user_id, content, mood_score, analysis_data, created_at
                    """,
                    (owner_id, content, mood_score, Jsonb(analysis_data)),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return _to_record(row)

    def find_label_id(self, kind: LabelKind, name: str) -> int | None:
        """Look up a vocabulary row by exact (case-sensitive) name."""
        query = sql.SQL("SELECT id FROM {table} WHERE name = %s").format(
            table=sql.Identifier(kind.value.vocabulary),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (name,))
                row = cur.fetchone()
        return None if row is None else int(row[0])

    def create_label(self, kind: LabelKind, name: str) -> int:
        """Insert a vocabulary row, returning the existing id if another writer won."""
        query = sql.SQL(
            """
            INSERT INTO {table} (name) VALUES (%s)
            ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
            RETURNING id
            """
        ).format(table=sql.Identifier(kind.value.vocabulary))
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (name,))
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"Could not create {kind.name.lower()} '{name}'")
        return int(row[0])

    def link_label(self, kind: LabelKind, entry_id: str, label_id: int) -> None:
        """Insert the join row linking an entry to a vocabulary row."""
        query = sql.SQL("INSERT INTO {join} (entry_id, {fk}) VALUES (%s, %s)").format(
            join=sql.Identifier(kind.value.join),
            fk=sql.Identifier(kind.value.foreign_key),
        )
        with get_connection() as conn:
            conn.execute(query, (entry_id, label_id))
            conn.commit()

    def find_by_id(self, owner_id: str, entry_id: str) -> JournalEntryRecord | None:
        """Find one of the owner's entries, labels resolved from the join tables."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_ENTRIES + " WHERE e.id = %s AND e.user_id = %s",
                    (entry_id, owner_id),
                )
                row = cur.fetchone()
        return None if row is None else _to_record(row)

    def list_for_owner(
        self,
        owner_id: str,
        *,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[JournalEntryRecord]:
        """Return the owner's entries, newest first."""
        query = _SELECT_ENTRIES + " WHERE e.user_id = %s"
        params: list[Any] = [owner_id]
        if since is not None:
            query += " AND e.created_at >= %s"
            params.append(since)
        query += " ORDER BY e.created_at DESC"
        if limit is not None:
            query += " LIMIT %s"
            params.append(limit)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)  # type: ignore[arg-type]
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]


def _to_record(row: dict[str, Any]) -> JournalEntryRecord:
    return JournalEntryRecord(
        id=str(row["id"]),
        owner_id=str(row["user_id"]),
        content=row["content"],
        mood_score=float(row["mood_score"]),
        analysis_data=row["analysis_data"],
        created_at=row["created_at"],
        emotions=list(row.get("emotions") or []),
        themes=list(row.get("themes") or []),
    )
