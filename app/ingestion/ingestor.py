from collections.abc import Sequence
from pathlib import Path

from app.auth.principal import Principal
from app.config.settings import Settings
from app.database.repositories.documents_repository import DocumentsRepository
from app.ingestion.models import IngestionResult, UploadRequest
from app.ingestion.pipeline import IngestionContext, IngestionStep
from app.ingestion.steps import (
    CreateDocumentStep,
    MarkCompletedStep,
    MarkFailedStep,
    ParseDocumentStep,
    StoreBlobStep,
    ValidateUploadStep,
)
from app.logging.logger import Log
from app.ocr.factory import OcrClientFactory
from app.storage.local_storage import LocalBlobStorage


class DocumentIngestor:
    """Orchestrates document ingestion.

    Pipeline: validate -> store blob -> create document -> OCR -> mark completed.
    Any failure after the document row exists marks it `failed`.
    """

    def __init__(self, steps: Sequence[IngestionStep], failed_step: IngestionStep) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    def ingest(self, principal: Principal, request: UploadRequest) -> IngestionResult:
        """Run the pipeline; failures come back as IngestionResult, never raised."""
        Log.info(
            f"Ingesting {request.filename} ({request.mime_type}, {request.size} bytes) "
            f"for user {principal.id}"
        )
        context = IngestionContext(principal=principal, request=request)
        try:
            context = self.run(context)
        except Exception as exc:
            document_id = context.document.id if context.document is not None else None
            return IngestionResult.failed(str(exc), document_id=document_id)

        if context.document is None:
            raise RuntimeError("Ingestion pipeline finished without a document")
        return IngestionResult.completed(context.document.id, context.parsed_text)

    def run(self, context: IngestionContext) -> IngestionContext:
        """Run every step in order; on error mark the document failed and re-raise."""
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            Log.error(f"Ingestion of {context.request.filename} failed: {exc}")
            self._mark_failed(context)
            raise
        return context

    def _mark_failed(self, context: IngestionContext) -> None:
        try:
            self._failed_step.run(context)
        except Exception as exc:
            Log.error(f"Could not record failure for {context.request.filename}: {exc}")


def build_ingestor(settings: Settings, files_root: Path | None = None) -> DocumentIngestor:
    """Build a DocumentIngestor with all required adapters."""
    doc_repo = DocumentsRepository()
    storage = LocalBlobStorage(
        files_root=files_root if files_root is not None else Path(settings.files_root),
        public_base_url=settings.public_base_url,
    )
    ocr_client = OcrClientFactory.create(settings)
    steps: list[IngestionStep] = [
        ValidateUploadStep(),
        StoreBlobStep(storage),
        CreateDocumentStep(doc_repo),
        ParseDocumentStep(ocr_client),
        MarkCompletedStep(doc_repo),
    ]
    return DocumentIngestor(steps=steps, failed_step=MarkFailedStep(doc_repo, storage))
