from abc import ABC, abstractmethod
from typing import Any


class BaseOcrClient(ABC):
    """Contract for document-digitization (OCR) provider adapters."""

    @abstractmethod
    def parse(self, content: bytes, *, filename: str, mime_type: str) -> dict[str, Any]:
        """Send a document to the provider and return its JSON response.

        Args:
            content: Raw file bytes.
            filename: Original filename, forwarded to the provider.
            mime_type: Declared MIME type of the file.

        Returns:
            The provider response; extracted text is expected under
            `content.text` and HTML under `content.html`.

        Raises:
            OcrNetworkError: on transport failures.
            OcrProviderError: on a non-success HTTP response.
            OcrError: on an unreadable response body.
        """
