from typing import Any

import pymupdf

from resume_review.raster.base import BaseDocumentEngine
from resume_review.raster.models import Viewport

_MAX_AA_LEVEL = 8


class PyMuPdfEngine(BaseDocumentEngine):
    """Renders and reads PDFs using PyMuPDF."""

    def __init__(self) -> None:
        pymupdf.TOOLS.set_aa_level(_MAX_AA_LEVEL)

    def open_document(self, data: bytes) -> Any:
        return pymupdf.open(stream=data, filetype="pdf")  # type: ignore[no-untyped-call]

    def close_document(self, document: Any) -> None:
        document.close()

    def get_page(self, document: Any, number: int) -> Any:
        if number < 1 or number > document.page_count:
            raise IndexError(
                f"page {number} out of range (document has {document.page_count} pages)"
            )
        return document.load_page(number - 1)

    def page_size(self, page: Any) -> tuple[float, float]:
        return float(page.rect.width), float(page.rect.height)

    def render(self, page: Any, viewport: Viewport) -> Any:
        matrix = pymupdf.Matrix(viewport.scale, viewport.scale)
        return page.get_pixmap(matrix=matrix, alpha=False)

    def encode_png(self, surface: Any) -> bytes:
        return bytes(surface.tobytes("png"))

    def extract_text(self, data: bytes) -> str:
        with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            pages = [page.get_text() for page in doc]
        return "\n".join(pages).strip()
