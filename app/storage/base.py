import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class StoredBlob:
    """Location of a stored upload."""

    key: str
    public_url: str


def build_storage_key(owner_id: str, filename: str) -> str:
    """Build a collision-free key: {owner_id}/{uuid4}-{basename}."""
    basename = PurePath(filename.replace("\\", "/")).name or "upload"
    return f"{owner_id}/{uuid.uuid4()}-{basename}"


class BaseBlobStorage(ABC):
    """Contract for blob storage backends holding uploaded journal documents."""

    @abstractmethod
    def store(self, key: str, content: bytes, content_type: str) -> StoredBlob:
        """Write the bytes under `key`.

        Raises:
            StorageError: if the blob cannot be written.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the blob under `key`; a missing blob is not an error.

        Raises:
            StorageError: if the blob exists but cannot be removed.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the public retrieval URL for `key`."""
