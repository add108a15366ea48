from abc import ABC, abstractmethod
from typing import Any

from resume_review.raster.models import Viewport


class BaseDocumentEngine(ABC):
    """Contract for paginated-document rendering adapters.

    Every method may raise; the rasterizer maps each call to its own
    failure diagnostic. Page numbers are 1-based.
    """

    @abstractmethod
    def open_document(self, data: bytes) -> Any:
        """Parse raw PDF bytes into an engine-specific document object."""

    @abstractmethod
    def close_document(self, document: Any) -> None:
        """Release resources held by an opened document."""

    @abstractmethod
    def get_page(self, document: Any, number: int) -> Any:
        """Return the page with the given 1-based number."""

    @abstractmethod
    def page_size(self, page: Any) -> tuple[float, float]:
        """Return the page size in points as (width, height)."""

    @abstractmethod
    def render(self, page: Any, viewport: Viewport) -> Any:
        """Render the page into a raster surface matching the viewport.

        Anti-aliasing must be enabled at the engine's highest quality.
        """

    @abstractmethod
    def encode_png(self, surface: Any) -> bytes:
        """Encode a rendered surface as PNG bytes."""

    @abstractmethod
    def extract_text(self, data: bytes) -> str:
        """Extract plain text from every page of a PDF."""
