import io
from typing import Any

import pdfplumber

from resume_review.raster.base import BaseDocumentEngine
from resume_review.raster.models import Viewport

_POINTS_PER_INCH = 72


class PdfPlumberEngine(BaseDocumentEngine):
    """Renders and reads PDFs using pdfplumber (pypdfium2 under the hood)."""

    def open_document(self, data: bytes) -> Any:
        return pdfplumber.open(io.BytesIO(data))

    def close_document(self, document: Any) -> None:
        document.close()

    def get_page(self, document: Any, number: int) -> Any:
        pages = document.pages
        if number < 1 or number > len(pages):
            raise IndexError(f"page {number} out of range (document has {len(pages)} pages)")
        return pages[number - 1]

    def page_size(self, page: Any) -> tuple[float, float]:
        return float(page.width), float(page.height)

    def render(self, page: Any, viewport: Viewport) -> Any:
        return page.to_image(
            resolution=_POINTS_PER_INCH * viewport.scale,
            antialias=True,
        )

    def encode_png(self, surface: Any) -> bytes:
        buf = io.BytesIO()
        # PageImage.save() quantizes to 256 colours by default.
        surface.original.save(buf, format="PNG")
        return buf.getvalue()

    def extract_text(self, data: bytes) -> str:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        return "\n".join(pages).strip()
