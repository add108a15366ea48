"""Turns an inference response into a Feedback value."""

import json

from resume_review.feedback.exceptions import FeedbackFormatError
from resume_review.feedback.models import Feedback
from resume_review.feedback.validator import validate_and_build
from resume_review.inference.models import InferenceResponse


def response_text(response: InferenceResponse) -> str:
    """Return the textual payload of a response.

    The content is either a plain string or a list of parts whose first
    element carries the text.

    Raises:
        FeedbackFormatError: if a list payload is empty or its first part has no text.
    """
    content = response.message.content
    if isinstance(content, str):
        return content
    if not content:
        raise FeedbackFormatError("Response content list is empty")
    text = getattr(content[0], "text", None)
    if not isinstance(text, str):
        raise FeedbackFormatError("First response content part has no text")
    return text


def parse_feedback(text: str) -> Feedback:
    """Parse response text into a validated Feedback.

    Raises:
        FeedbackFormatError: on invalid JSON or an unexpected shape.
    """
    return validate_and_build(parse_json_object(text))


def parse_json_object(raw: str) -> dict[str, object]:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise FeedbackFormatError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise FeedbackFormatError("JSON response must be an object")
    return parsed
