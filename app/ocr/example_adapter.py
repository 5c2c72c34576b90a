"""Offline OCR adapter.

Decodes the upload as UTF-8 text instead of calling a provider. Useful for
local development with plain-text files renamed to an accepted type, and as a
template for new provider adapters.
"""

import html
from typing import Any

from app.ocr.base import BaseOcrClient


class ExampleOcrAdapter(BaseOcrClient):
    """Returns a provider-shaped response built from the file bytes."""

    def parse(self, content: bytes, *, filename: str, mime_type: str) -> dict[str, Any]:
        text = content.decode("utf-8", errors="ignore").strip()
        return {
            "api": "example",
            "model": "example",
            "content": {"text": text, "html": f"<p>{html.escape(text)}</p>"},
            "metadata": {"filename": filename, "mime_type": mime_type},
        }
