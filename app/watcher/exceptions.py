class WatchError(Exception):
    """Base exception for document status watching."""


class WatchTimeoutError(WatchError):
    """Raised when a document does not reach a terminal status in time."""
