from typing import Any

from app.database.repositories.documents_repository import DocumentsRepository
from app.ingestion.pipeline import IngestionContext, IngestionStep
from app.ingestion.validation import validate_upload
from app.logging.logger import Log
from app.ocr.base import BaseOcrClient
from app.storage.base import BaseBlobStorage, build_storage_key


class ValidateUploadStep(IngestionStep):
    def run(self, context: IngestionContext) -> IngestionContext:
        validate_upload(context.request.size, context.request.mime_type)
        return context


class StoreBlobStep(IngestionStep):
    def __init__(self, storage: BaseBlobStorage) -> None:
        self._storage = storage

    def run(self, context: IngestionContext) -> IngestionContext:
        key = build_storage_key(context.principal.id, context.request.filename)
        blob = self._storage.store(key, context.request.content, context.request.mime_type)
        context.storage_key = blob.key
        context.public_url = blob.public_url
        Log.info(f"Stored {context.request.size} bytes at {blob.key}")
        return context


class CreateDocumentStep(IngestionStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: IngestionContext) -> IngestionContext:
        context.document = self._doc_repo.create(
            owner_id=context.principal.id,
            file_name=context.request.filename,
            file_type=context.request.mime_type,
            file_size=context.request.size,
            file_path=context.storage_key,
            public_url=context.public_url,
        )
        Log.info(f"Document {context.document.id} created in processing status")
        return context


class ParseDocumentStep(IngestionStep):
    def __init__(self, ocr_client: BaseOcrClient) -> None:
        self._ocr_client = ocr_client

    def run(self, context: IngestionContext) -> IngestionContext:
        response = self._ocr_client.parse(
            context.request.content,
            filename=context.request.filename,
            mime_type=context.request.mime_type,
        )
        context.provider_response = response
        context.parsed_text, context.parsed_html = _extract_content(response)
        Log.info(
            f"Extracted {len(context.parsed_text)} text chars and "
            f"{len(context.parsed_html)} HTML chars from {context.request.filename}"
        )
        return context


class MarkCompletedStep(IngestionStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.document is None:
            raise ValueError("IngestionContext.document must be set before completion")
        self._doc_repo.mark_completed(
            context.document.id,
            parsed_content=context.parsed_text,
            parsed_html=context.parsed_html,
            metadata=context.provider_response,
        )
        Log.info(f"Document {context.document.id} marked as completed")
        return context


class MarkFailedStep(IngestionStep):
    def __init__(
        self, doc_repo: DocumentsRepository, storage: BaseBlobStorage | None = None
    ) -> None:
        self._doc_repo = doc_repo
        self._storage = storage

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.document is None:
            # No document row references the blob yet.
            if context.storage_key and self._storage is not None:
                self._storage.delete(context.storage_key)
                Log.warning(f"Removed unreferenced blob {context.storage_key}")
            return context
        self._doc_repo.mark_failed(context.document.id, context.error_message)
        Log.error(f"Document {context.document.id} marked as failed: {context.error_message}")
        return context


def _extract_content(response: dict[str, Any]) -> tuple[str, str]:
    content = response.get("content")
    if not isinstance(content, dict):
        return "", ""
    text = content.get("text") or ""
    html = content.get("html") or ""
    return str(text), str(html)
