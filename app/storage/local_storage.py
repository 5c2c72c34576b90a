from pathlib import Path

from app.storage.base import BaseBlobStorage, StoredBlob
from app.storage.exceptions import StorageError


class LocalBlobStorage(BaseBlobStorage):
    """Stores uploads on the local filesystem under a files root."""

    def __init__(self, files_root: Path, public_base_url: str) -> None:
        self._files_root = files_root
        self._public_base_url = public_base_url.rstrip("/")

    def store(self, key: str, content: bytes, content_type: str) -> StoredBlob:
        _ = content_type  # the filesystem keeps no content type
        path = self._resolve_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to write blob {key}: {exc}") from exc
        try:
            with path.open("xb") as handle:
                handle.write(content)
        except FileExistsError as exc:
            raise StorageError(f"Blob already exists: {key}") from exc
        except OSError as exc:
            raise StorageError(f"Failed to write blob {key}: {exc}") from exc
        return StoredBlob(key=key, public_url=self.public_url(key))

    def delete(self, key: str) -> None:
        path = self._resolve_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete blob {key}: {exc}") from exc

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"

    def _resolve_path(self, key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            raise StorageError(f"Storage key escapes files root: {key}")
        return path
