from unittest.mock import patch

import pytest

from resume_review.raster.factory import DocumentEngineFactory
from resume_review.raster.pdfplumber_adapter import PdfPlumberEngine
from resume_review.raster.pymupdf_adapter import PyMuPdfEngine


def _make_settings(pdf_engine: str):  # type: ignore[no-untyped-def]
    """Create a minimal Settings-like object with only pdf_engine."""
    with patch("resume_review.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        return settings


class TestDocumentEngineFactory:
    def test_creates_pymupdf_engine(self) -> None:
        engine = DocumentEngineFactory.create(_make_settings("pymupdf"))
        assert isinstance(engine, PyMuPdfEngine)

    def test_creates_pdfplumber_engine(self) -> None:
        engine = DocumentEngineFactory.create(_make_settings("pdfplumber"))
        assert isinstance(engine, PdfPlumberEngine)

    def test_is_case_insensitive(self) -> None:
        engine = DocumentEngineFactory.create(_make_settings("PyMuPDF"))
        assert isinstance(engine, PyMuPdfEngine)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            DocumentEngineFactory.create(_make_settings("unknown"))


class TestEngineAvailability:
    def test_installed_engines_are_available(self) -> None:
        assert DocumentEngineFactory.is_available("pymupdf")
        assert DocumentEngineFactory.is_available("pdfplumber")

    def test_unknown_engine_is_unavailable(self) -> None:
        assert not DocumentEngineFactory.is_available("unknown")

    def test_missing_library_is_unavailable(self) -> None:
        with patch("resume_review.raster.factory.importlib.util.find_spec", return_value=None):
            assert not DocumentEngineFactory.is_available("pymupdf")


class TestTextExtraction:
    @pytest.mark.parametrize("engine", [PyMuPdfEngine(), PdfPlumberEngine()])
    def test_extracts_text(self, engine, sample_pdf_bytes: bytes) -> None:  # type: ignore[no-untyped-def]
        assert "Jane Doe" in engine.extract_text(sample_pdf_bytes)

    def test_extracts_all_pages(self, multi_page_pdf_bytes: bytes) -> None:
        text = PyMuPdfEngine().extract_text(multi_page_pdf_bytes)
        assert "Page one content" in text
        assert "Page two content" in text
