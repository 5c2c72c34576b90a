from dataclasses import dataclass


@dataclass(frozen=True)
class UploadRequest:
    """A file submitted for ingestion."""

    filename: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one ingestion run, returned instead of raising."""

    success: bool
    document_id: str | None = None
    parsed_content: str = ""
    error: str | None = None

    @classmethod
    def completed(cls, document_id: str, parsed_content: str) -> "IngestionResult":
        return cls(success=True, document_id=document_id, parsed_content=parsed_content)

    @classmethod
    def failed(cls, error: str, document_id: str | None = None) -> "IngestionResult":
        return cls(success=False, document_id=document_id, error=error)
