from app.config.settings import Settings
from app.ocr.base import BaseOcrClient
from app.ocr.example_adapter import ExampleOcrAdapter
from app.ocr.upstage_adapter import UpstageDocumentParseAdapter
from app.retry import RetryPolicy


class OcrClientFactory:
    """Creates the configured OCR adapter."""

    PROVIDERS = ("example", "upstage")

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrClient:
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return ExampleOcrAdapter()
        if provider == "upstage":
            if not settings.upstage_api_key:
                raise ValueError("upstage_api_key is required for ocr_provider=upstage")
            return UpstageDocumentParseAdapter(
                api_key=settings.upstage_api_key,
                url=settings.upstage_document_parse_url,
                timeout_seconds=settings.provider_timeout_seconds,
                retry_policy=RetryPolicy.from_settings(settings),
            )
        raise ValueError(
            f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
