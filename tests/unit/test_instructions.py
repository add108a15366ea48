"""Tests for evaluation instruction loading."""

from pathlib import Path

import pytest

from resume_review.feedback.exceptions import InstructionsError
from resume_review.feedback.instructions import (
    load_prompt_template,
    load_response_format,
    prepare_instructions,
)


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{job_title}" in template
        assert "{job_description}" in template
        assert "{response_format}" in template

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(InstructionsError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadResponseFormat:
    def test_loads_default_format(self) -> None:
        text = load_response_format()
        assert "overallScore" in text
        assert "toneAndStyle" in text

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(InstructionsError, match="Failed to load response format"):
            load_response_format(Path("/nonexistent/format.json"))


class TestPrepareInstructions:
    def test_fills_job_context(self) -> None:
        text = prepare_instructions("Engineer", "Build things")
        assert "The job title is: Engineer" in text
        assert "The job description is: Build things" in text
        assert '"overallScore"' in text

    def test_custom_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("{job_title}|{job_description}|{response_format}")
        fmt = tmp_path / "format.json"
        fmt.write_text("FORMAT")

        text = prepare_instructions(
            "A", "B", template_path=template, response_format_path=fmt
        )

        assert text == "A|B|FORMAT"

    def test_unknown_placeholder_raises(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("{unknown}")
        with pytest.raises(InstructionsError, match="Invalid prompt template"):
            prepare_instructions("A", "B", template_path=template)
