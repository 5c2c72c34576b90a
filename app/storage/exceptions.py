class StorageError(Exception):
    """Raised when an uploaded blob cannot be written."""
