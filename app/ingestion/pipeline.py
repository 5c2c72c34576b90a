from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.auth.principal import Principal
from app.database.models import DocumentRecord
from app.ingestion.models import UploadRequest


@dataclass(slots=True)
class IngestionContext:
    principal: Principal
    request: UploadRequest
    storage_key: str = ""
    public_url: str = ""
    document: DocumentRecord | None = None
    provider_response: dict[str, Any] = field(default_factory=dict)
    parsed_text: str = ""
    parsed_html: str = ""
    error_message: str = ""


class IngestionStep(ABC):
    @abstractmethod
    def run(self, context: IngestionContext) -> IngestionContext:
        raise NotImplementedError
