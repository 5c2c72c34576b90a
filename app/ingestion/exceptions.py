class IngestionError(Exception):
    """Base exception for all document ingestion errors."""


class DocumentValidationError(IngestionError):
    """Raised when an upload is rejected before any network call."""


class DocumentNotFoundError(IngestionError):
    """Raised when a document cannot be found in the database."""


class InvalidStatusTransitionError(IngestionError):
    """Raised when a document that already reached a terminal status is updated."""
