"""First-page PDF to PNG conversion."""

import asyncio
import re
from collections.abc import Callable
from typing import Any

from resume_review.config.settings import Settings
from resume_review.logging.logger import Log
from resume_review.raster.base import BaseDocumentEngine
from resume_review.raster.factory import DocumentEngineFactory
from resume_review.raster.loader import EngineLoader, get_engine_loader
from resume_review.raster.models import (
    ConversionResult,
    DocumentFile,
    ImageHandle,
    RasterErrorKind,
    Viewport,
)

DEFAULT_SCALE = 4.0
DEFAULT_MAX_PIXELS = 100_000_000

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


def image_file_name(source_name: str) -> str:
    """``resume.PDF`` -> ``resume.png``; names without a .pdf suffix get .png appended."""
    return f"{_PDF_SUFFIX.sub('', source_name)}.png"


class _Abort(Exception):
    def __init__(self, kind: RasterErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class Rasterizer:
    """Renders page 1 of a PDF file into a PNG artifact.

    ``rasterize`` never raises: every failure comes back as a
    ``ConversionResult`` without a file.
    """

    def __init__(
        self,
        loader: EngineLoader,
        *,
        environment_check: Callable[[], bool],
        scale: float = DEFAULT_SCALE,
        max_pixels: int = DEFAULT_MAX_PIXELS,
        engine_name: str = "pdf",
    ) -> None:
        self._loader = loader
        self._environment_check = environment_check
        self._scale = scale
        self._max_pixels = max_pixels
        self._engine_name = engine_name

    async def rasterize(self, file: DocumentFile) -> ConversionResult:
        if not self._environment_check():
            message = (
                "PDF conversion requires a rendering environment: "
                f"'{self._engine_name}' is not available"
            )
            Log.error(message)
            return ConversionResult.failure(RasterErrorKind.ENVIRONMENT_UNAVAILABLE, message)

        try:
            png_bytes = await self._render_first_page(file)
            image = await self._step(
                RasterErrorKind.ENCODE,
                "Failed to create image from rendered page",
                ImageHandle.create,
                png_bytes,
            )
        except _Abort as abort:
            Log.error(f"Rasterization of '{file.name}' failed: {abort.message}")
            return ConversionResult.failure(abort.kind, abort.message)

        image_file = DocumentFile(
            name=image_file_name(file.name),
            mime_type="image/png",
            content=png_bytes,
        )
        Log.info(f"Rasterized '{file.name}' into '{image_file.name}' ({len(png_bytes)} bytes)")
        return ConversionResult.success(image=image, file=image_file)

    async def _render_first_page(self, file: DocumentFile) -> bytes:
        try:
            engine = await self._loader.load()
        except Exception as exc:
            raise _Abort(RasterErrorKind.ENGINE_LOAD, f"Failed to load PDF engine: {exc}") from exc

        try:
            data = await file.read_bytes()
        except Exception as exc:
            raise _Abort(RasterErrorKind.READ, f"Failed to read PDF file: {exc}") from exc

        document = await self._step(
            RasterErrorKind.PARSE, "Failed to load PDF document", engine.open_document, data
        )
        try:
            return await self._render_document(engine, document)
        finally:
            await self._close(engine, document)

    async def _render_document(self, engine: BaseDocumentEngine, document: Any) -> bytes:
        page = await self._step(
            RasterErrorKind.PAGE, "Failed to get PDF page", engine.get_page, document, 1
        )
        viewport = self._viewport(engine, page)
        surface = await self._step(
            RasterErrorKind.RENDER, "Failed to render PDF page", engine.render, page, viewport
        )
        png_bytes: bytes = await self._step(
            RasterErrorKind.ENCODE,
            "Failed to create image from rendered page",
            engine.encode_png,
            surface,
        )
        if not png_bytes:
            raise _Abort(
                RasterErrorKind.ENCODE,
                "Failed to create image from rendered page: encoder returned no data",
            )
        return png_bytes

    def _viewport(self, engine: BaseDocumentEngine, page: Any) -> Viewport:
        try:
            width, height = engine.page_size(page)
        except Exception as exc:
            raise _Abort(RasterErrorKind.SURFACE, f"Failed to compute page viewport: {exc}") from exc
        viewport = Viewport(
            width=int(width * self._scale),
            height=int(height * self._scale),
            scale=self._scale,
        )
        if viewport.width <= 0 or viewport.height <= 0:
            raise _Abort(
                RasterErrorKind.SURFACE,
                f"Failed to allocate raster surface: empty viewport {viewport.width}x{viewport.height}",
            )
        if viewport.pixels > self._max_pixels:
            raise _Abort(
                RasterErrorKind.SURFACE,
                f"Failed to allocate raster surface: {viewport.width}x{viewport.height} "
                f"exceeds {self._max_pixels} pixels",
            )
        return viewport

    @staticmethod
    async def _step(
        kind: RasterErrorKind,
        message: str,
        func: Callable[..., Any],
        *args: Any,
    ) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except Exception as exc:
            raise _Abort(kind, f"{message}: {exc}") from exc

    @staticmethod
    async def _close(engine: BaseDocumentEngine, document: Any) -> None:
        try:
            await asyncio.to_thread(engine.close_document, document)
        except Exception as exc:
            Log.warning(f"Failed to close PDF document: {exc}")


def build_rasterizer(settings: Settings, loader: EngineLoader | None = None) -> Rasterizer:
    """Build a Rasterizer bound to the process-wide engine loader."""
    engine = settings.pdf_engine.lower()
    return Rasterizer(
        loader if loader is not None else get_engine_loader(settings),
        environment_check=lambda: DocumentEngineFactory.is_available(engine),
        scale=settings.raster_scale,
        max_pixels=settings.raster_max_pixels,
        engine_name=engine,
    )
