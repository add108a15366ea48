import asyncio
import uuid
from pathlib import Path

from resume_review.logging.logger import Log
from resume_review.raster.models import DocumentFile
from resume_review.storage.base import BaseBlobStore
from resume_review.storage.models import UploadedBlob


def blob_file_path(files_root: Path, blob_id: str, name: str) -> Path:
    """Build path to a stored file: {files_root}/{blob_id}/{name}"""
    return files_root / blob_id / name


class LocalBlobStore(BaseBlobStore):
    """Stores uploaded files on the local filesystem below ``files_root``."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    async def upload(self, files: list[DocumentFile]) -> UploadedBlob | None:
        if not files:
            return None
        stored = [await self._store(file) for file in files]
        return stored[0]

    async def read(self, path: str) -> bytes | None:
        resolved = self._resolve(path)
        if resolved is None or not resolved.is_file():
            Log.warning(f"Blob not found: {path}")
            return None
        return await asyncio.to_thread(resolved.read_bytes)

    async def _store(self, file: DocumentFile) -> UploadedBlob:
        data = await file.read_bytes()
        name = Path(file.name).name or "upload.bin"
        blob_id = uuid.uuid4().hex
        target = blob_file_path(self._files_root, blob_id, name)
        await asyncio.to_thread(self._write, target, data)
        relative = target.relative_to(self._files_root).as_posix()
        Log.info(f"Stored {len(data)} bytes at {relative}")
        return UploadedBlob(path=relative, name=name, size=len(data))

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def _resolve(self, path: str) -> Path | None:
        root = self._files_root.resolve()
        candidate = (root / path).resolve()
        if not candidate.is_relative_to(root):
            return None
        return candidate
