import importlib
import importlib.util
from typing import ClassVar

from resume_review.config.settings import Settings
from resume_review.raster.base import BaseDocumentEngine


class DocumentEngineFactory:
    """Creates the configured document engine.

    Adapter modules are imported on demand so the rendering library is only
    loaded when an engine is actually requested.
    """

    ADAPTERS: ClassVar[dict[str, tuple[str, str, str]]] = {
        "pymupdf": ("resume_review.raster.pymupdf_adapter", "PyMuPdfEngine", "pymupdf"),
        "pdfplumber": (
            "resume_review.raster.pdfplumber_adapter",
            "PdfPlumberEngine",
            "pdfplumber",
        ),
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentEngine:
        module_name, class_name, _ = cls._lookup(settings.pdf_engine)
        module = importlib.import_module(module_name)
        engine_cls: type[BaseDocumentEngine] = getattr(module, class_name)
        return engine_cls()

    @classmethod
    def is_available(cls, engine: str) -> bool:
        """Return True if the backing library for ``engine`` can be imported."""
        entry = cls.ADAPTERS.get(engine.lower())
        if entry is None:
            return False
        return importlib.util.find_spec(entry[2]) is not None

    @classmethod
    def _lookup(cls, engine: str) -> tuple[str, str, str]:
        entry = cls.ADAPTERS.get(engine.lower())
        if entry is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return entry
