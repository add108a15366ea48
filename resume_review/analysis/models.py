import json
from dataclasses import dataclass, replace
from typing import Any

from resume_review.feedback.exceptions import FeedbackFormatError
from resume_review.feedback.models import Feedback, feedback_to_dict
from resume_review.feedback.validator import validate_and_build
from resume_review.raster.models import DocumentFile

RECORD_KEY_PREFIX = "resume:"


def record_key(record_id: str) -> str:
    return f"{RECORD_KEY_PREFIX}{record_id}"


class RecordFormatError(ValueError):
    """Raised when stored text is not a valid serialized AnalysisRecord."""


@dataclass(frozen=True)
class AnalysisRecord:
    """Persisted state of one résumé submission.

    ``feedback`` is None while the evaluation is pending and is set exactly
    once, by building a new record with ``with_feedback``.
    """

    id: str
    resume_path: str
    image_path: str
    company_name: str
    job_title: str
    job_description: str
    feedback: Feedback | None = None

    @property
    def key(self) -> str:
        return record_key(self.id)

    @property
    def is_pending(self) -> bool:
        return self.feedback is None

    def with_feedback(self, feedback: Feedback) -> "AnalysisRecord":
        if self.feedback is not None:
            raise ValueError(f"Record {self.id} already has feedback")
        return replace(self, feedback=feedback)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "resumePath": self.resume_path,
            "imagePath": self.image_path,
            "companyName": self.company_name,
            "jobTitle": self.job_title,
            "jobDescription": self.job_description,
            "feedback": feedback_to_dict(self.feedback) if self.feedback is not None else "",
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "AnalysisRecord":
        """Parse a record serialized by ``to_json``.

        Raises:
            RecordFormatError: on malformed JSON or missing/invalid fields.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RecordFormatError(f"Invalid record JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise RecordFormatError("Record JSON must be an object")

        fields: dict[str, str] = {}
        for attr, key in _STRING_FIELDS.items():
            value = data.get(key)
            if not isinstance(value, str):
                raise RecordFormatError(f"Record field '{key}' must be a string")
            fields[attr] = value

        return cls(**fields, feedback=_parse_stored_feedback(data.get("feedback")))


_STRING_FIELDS: dict[str, str] = {
    "id": "id",
    "resume_path": "resumePath",
    "image_path": "imagePath",
    "company_name": "companyName",
    "job_title": "jobTitle",
    "job_description": "jobDescription",
}


def _parse_stored_feedback(raw: Any) -> Feedback | None:
    if raw is None or raw == "":
        return None
    if not isinstance(raw, dict):
        raise RecordFormatError("Record field 'feedback' must be an object or empty")
    try:
        return validate_and_build(raw)
    except FeedbackFormatError as exc:
        raise RecordFormatError(f"Stored feedback is invalid: {exc}") from exc


@dataclass(frozen=True)
class Submission:
    """What the user hands to the pipeline for one analysis run."""

    file: DocumentFile | None
    company_name: str = ""
    job_title: str = ""
    job_description: str = ""
