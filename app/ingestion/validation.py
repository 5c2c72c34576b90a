from app.ingestion.exceptions import DocumentValidationError

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/bmp",
    "application/pdf",
    "image/tiff",
    "image/heic",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
})


def validate_upload(file_size: int, mime_type: str) -> None:
    """Reject uploads outside the size ceiling or the MIME allow-list.

    Raises:
        DocumentValidationError: with a user-facing message.
    """
    if mime_type not in ALLOWED_MIME_TYPES:
        raise DocumentValidationError("File type not supported")
    if file_size > MAX_UPLOAD_BYTES:
        raise DocumentValidationError("File exceeds the 10 MB size limit")
