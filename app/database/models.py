from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_FAILED})


@dataclass
class DocumentRecord:
    """Represents a row from the journal_documents table."""

    id: str
    owner_id: str
    file_name: str
    file_type: str
    file_size: int
    file_path: str
    public_url: str
    status: str
    parsed_content: str | None = None
    parsed_html: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class JournalEntryRecord:
    """Represents a row from journal_entries with its join-table labels."""

    id: str
    owner_id: str
    content: str
    mood_score: float
    analysis_data: dict[str, Any] | None = None
    created_at: datetime | None = None
    emotions: list[str] = field(default_factory=list)
    themes: list[str] = field(default_factory=list)

