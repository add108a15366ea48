import io
import json
from collections.abc import Generator
from typing import Any

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resume_review.raster.loader import reset_engine_loader
from resume_review.raster.models import DocumentFile


@pytest.fixture()
def feedback_payload() -> dict[str, Any]:
    """A feedback document that passes validation."""

    def category(score: float) -> dict[str, Any]:
        return {
            "score": score,
            "tips": [
                {"type": "good", "tip": "Clear headings"},
                {"type": "improve", "tip": "Add metrics", "explanation": "Quantify results."},
            ],
        }

    return {
        "overallScore": 72,
        "ATS": category(80),
        "toneAndStyle": category(70),
        "content": category(65),
        "structure": category(75),
        "skills": category(60),
    }


@pytest.fixture()
def feedback_json(feedback_payload: dict[str, Any]) -> str:
    return json.dumps(feedback_payload)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Jane Doe - Software Engineer")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_file(sample_pdf_bytes: bytes) -> DocumentFile:
    return DocumentFile(name="resume.pdf", mime_type="application/pdf", content=sample_pdf_bytes)


@pytest.fixture(autouse=True)
def _fresh_engine_loader() -> Generator[None, None, None]:
    reset_engine_loader()
    yield
    reset_engine_loader()
