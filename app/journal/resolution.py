"""Reads a stored journal entry into one typed view.

Precedence, applied everywhere entries are displayed:
    mood score: embedded analysis -> denormalized column -> 50
    emotions, themes, summary: embedded analysis -> join-table labels -> empty
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.database.models import JournalEntryRecord
from app.journal.normalization import DEFAULT_MOOD_SCORE, coerce_mood_score, label_names

SOURCE_EMBEDDED = "embedded"
SOURCE_COLUMNS = "columns"


@dataclass(frozen=True)
class ResolvedEntry:
    id: str
    content: str
    mood_score: int | float
    created_at: datetime | None
    emotions: list[str] = field(default_factory=list)
    themes: list[str] = field(default_factory=list)
    summary: str = ""
    source: str = SOURCE_COLUMNS


def embedded_analysis(record: JournalEntryRecord) -> dict[str, Any] | None:
    data = record.analysis_data
    if not isinstance(data, dict):
        return None
    analysis = data.get("analysis")
    return analysis if isinstance(analysis, dict) else None


def resolve_entry(record: JournalEntryRecord) -> ResolvedEntry:
    analysis = embedded_analysis(record)
    if analysis is None:
        return ResolvedEntry(
            id=record.id,
            content=record.content,
            mood_score=_column_score(record),
            created_at=record.created_at,
            emotions=list(record.emotions),
            themes=list(record.themes),
        )

    score = analysis.get("mood_score")
    emotions = analysis.get("emotions")
    themes = analysis.get("themes")
    summary = analysis.get("summary")
    return ResolvedEntry(
        id=record.id,
        content=record.content,
        mood_score=coerce_mood_score(score) if score else _column_score(record),
        created_at=record.created_at,
        emotions=label_names(emotions) if isinstance(emotions, list) else list(record.emotions),
        themes=label_names(themes) if isinstance(themes, list) else list(record.themes),
        summary=summary if isinstance(summary, str) else "",
        source=SOURCE_EMBEDDED,
    )


def _column_score(record: JournalEntryRecord) -> int | float:
    if not record.mood_score:
        return DEFAULT_MOOD_SCORE
    return coerce_mood_score(record.mood_score)
