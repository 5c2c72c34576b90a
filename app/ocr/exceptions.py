class OcrError(Exception):
    """Raised when document digitization fails."""


class OcrNetworkError(OcrError):
    """Raised when the OCR provider cannot be reached or times out."""


class OcrProviderError(OcrError):
    """Raised when the OCR provider answers with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"OCR provider error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body
