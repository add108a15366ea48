import asyncio
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class DocumentFile:
    """A named binary file artifact, held in memory or backed by a path on disk."""

    name: str
    mime_type: str = "application/octet-stream"
    content: bytes | None = None
    source_path: Path | None = None

    @classmethod
    def from_path(cls, path: Path, mime_type: str = "application/pdf") -> "DocumentFile":
        return cls(name=path.name, mime_type=mime_type, source_path=path)

    async def read_bytes(self) -> bytes:
        """Return the full byte content.

        Raises:
            OSError: if the backing file cannot be read.
            ValueError: if the file has neither content nor a source path.
        """
        if self.content is not None:
            return self.content
        if self.source_path is None:
            raise ValueError(f"File '{self.name}' has no content")
        return await asyncio.to_thread(self.source_path.read_bytes)


@dataclass
class ImageHandle:
    """Temporary on-disk copy of a rendered image.

    The rasterizer never deletes it; whoever receives the handle calls
    ``release()`` once the image is no longer displayed.
    """

    path: Path
    released: bool = field(default=False, init=False)

    @classmethod
    def create(cls, png_bytes: bytes) -> "ImageHandle":
        fd, name = tempfile.mkstemp(prefix="resume-review-", suffix=".png")
        with os.fdopen(fd, "wb") as fh:
            fh.write(png_bytes)
        return cls(path=Path(name))

    @property
    def url(self) -> str:
        return self.path.as_uri()

    def release(self) -> None:
        if self.released:
            return
        self.path.unlink(missing_ok=True)
        self.released = True


class RasterErrorKind(str, Enum):
    ENVIRONMENT_UNAVAILABLE = "environment_unavailable"
    ENGINE_LOAD = "engine_load"
    READ = "read"
    PARSE = "parse"
    PAGE = "page"
    SURFACE = "surface"
    RENDER = "render"
    ENCODE = "encode"


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int
    scale: float

    @property
    def pixels(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a rasterization: an image and its file artifact, or an error."""

    image: ImageHandle | None = None
    file: DocumentFile | None = None
    error: str | None = None
    error_kind: RasterErrorKind | None = None

    @classmethod
    def success(cls, image: ImageHandle, file: DocumentFile) -> "ConversionResult":
        return cls(image=image, file=file)

    @classmethod
    def failure(cls, kind: RasterErrorKind, error: str) -> "ConversionResult":
        return cls(error=error, error_kind=kind)
