import json
from typing import Any, ClassVar

import httpx

from app.logging.logger import Log
from app.ocr.base import BaseOcrClient
from app.ocr.exceptions import OcrError, OcrNetworkError, OcrProviderError
from app.retry import RetryPolicy


class UpstageDocumentParseAdapter(BaseOcrClient):
    """OCR adapter for the Upstage document-digitization endpoint."""

    FORM_FIELDS: ClassVar[dict[str, str]] = {
        "output_formats": json.dumps(["html", "text"]),
        "base64_encoding": json.dumps(["table"]),
        "ocr": "auto",
        "coordinates": "true",
        "model": "document-parse",
    }

    def __init__(
        self,
        *,
        api_key: str,
        url: str,
        timeout_seconds: int,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._retry_policy = retry_policy or RetryPolicy()
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def parse(self, content: bytes, *, filename: str, mime_type: str) -> dict[str, Any]:
        response = self._retry_policy.call(
            lambda: self._post(content, filename, mime_type),
            retry_on=(OcrNetworkError,),
            description="OCR request",
        )

        if response.is_error:
            Log.error(f"OCR provider error {response.status_code}: {response.text}")
            raise OcrProviderError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise OcrError(f"OCR provider returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise OcrError("OCR provider response must be a JSON object")
        return payload

    def _post(self, content: bytes, filename: str, mime_type: str) -> httpx.Response:
        try:
            return self._client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                data=self.FORM_FIELDS,
                files={"document": (filename, content, mime_type)},
            )
        except httpx.TransportError as exc:
            raise OcrNetworkError(f"OCR provider network error: {exc}") from exc
