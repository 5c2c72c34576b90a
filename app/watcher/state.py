from collections.abc import Callable

from app.database.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PROCESSING,
    TERMINAL_STATUSES,
    DocumentRecord,
)
from app.logging.logger import Log

FAILED_MESSAGE = "Processing failed. Please try again or use a different file."


def extract_document_text(record: DocumentRecord) -> str:
    """Return parsed text, falling back to the provider's `content.text` in metadata."""
    if record.parsed_content and record.parsed_content.strip():
        return record.parsed_content
    metadata = record.metadata or {}
    content = metadata.get("content")
    if isinstance(content, dict) and content.get("text"):
        return str(content["text"])
    return ""


def failure_message(record: DocumentRecord) -> str:
    error = (record.metadata or {}).get("error")
    return f"{FAILED_MESSAGE} ({error})" if error else FAILED_MESSAGE


class DocumentStatusTracker:
    """Single-fire state machine: processing -> completed | failed.

    Observations may arrive from several sources in any order; only the first
    terminal one triggers a callback, everything after it is ignored.
    """

    def __init__(
        self,
        on_complete: Callable[[str], None],
        on_failed: Callable[[str], None] | None = None,
    ) -> None:
        self._on_complete = on_complete
        self._on_failed = on_failed
        self._status = STATUS_PROCESSING

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_terminal(self) -> bool:
        return self._status in TERMINAL_STATUSES

    def observe(self, record: DocumentRecord) -> bool:
        """Feed one observed row; return True if it caused the terminal transition."""
        if self.is_terminal:
            if record.status != self._status:
                Log.warning(
                    f"Ignoring status {record.status} for document {record.id}, "
                    f"already {self._status}"
                )
            return False

        if record.status == STATUS_PROCESSING:
            return False
        if record.status == STATUS_COMPLETED:
            self._status = STATUS_COMPLETED
            self._on_complete(extract_document_text(record))
            return True
        if record.status == STATUS_FAILED:
            self._status = STATUS_FAILED
            if self._on_failed is not None:
                self._on_failed(failure_message(record))
            return True

        Log.warning(f"Unknown status {record.status!r} for document {record.id}")
        return False
