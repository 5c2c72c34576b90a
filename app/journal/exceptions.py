class JournalError(Exception):
    """Base exception for journal entry operations."""


class EmptyContentError(JournalError):
    """Raised when empty content is submitted for analysis."""


class EntryNotFoundError(JournalError):
    """Raised when a journal entry does not exist for the principal."""
