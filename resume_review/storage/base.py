from abc import ABC, abstractmethod

from resume_review.raster.models import DocumentFile
from resume_review.storage.models import UploadedBlob


class BaseBlobStore(ABC):
    """Contract for file storage adapters."""

    @abstractmethod
    async def upload(self, files: list[DocumentFile]) -> UploadedBlob | None:
        """Store the given files and describe the first stored one.

        Returns:
            The stored blob, or None if nothing was stored.
        """

    @abstractmethod
    async def read(self, path: str) -> bytes | None:
        """Return the blob stored at ``path``, or None if there is none."""


class BaseKeyValueStore(ABC):
    """Contract for string key-value persistence adapters."""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Write ``value`` under ``key``; returns True once acknowledged."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value under ``key``, or None if absent."""
