import json
from typing import Any

import pytest

from resume_review.analysis.models import AnalysisRecord, RecordFormatError, record_key
from resume_review.feedback.validator import validate_and_build


def _make_record(**overrides: Any) -> AnalysisRecord:
    fields: dict[str, Any] = {
        "id": "rec-1",
        "resume_path": "a1/resume.pdf",
        "image_path": "b2/resume.png",
        "company_name": "Acme",
        "job_title": "Engineer",
        "job_description": "Build things",
    }
    fields.update(overrides)
    return AnalysisRecord(**fields)


class TestRecordKey:
    def test_prefixes_id(self) -> None:
        assert record_key("abc") == "resume:abc"
        assert _make_record().key == "resume:rec-1"


class TestSerialization:
    def test_pending_record_round_trips(self) -> None:
        record = _make_record()
        assert AnalysisRecord.from_json(record.to_json()) == record

    def test_completed_record_round_trips(self, feedback_payload: dict[str, Any]) -> None:
        record = _make_record(feedback=validate_and_build(feedback_payload))
        assert AnalysisRecord.from_json(record.to_json()) == record

    def test_pending_feedback_is_written_as_empty_string(self) -> None:
        data = json.loads(_make_record().to_json())
        assert data["feedback"] == ""
        assert data["companyName"] == "Acme"
        assert data["resumePath"] == "a1/resume.pdf"

    def test_null_feedback_reads_as_pending(self) -> None:
        data = json.loads(_make_record().to_json())
        data["feedback"] = None
        assert AnalysisRecord.from_json(json.dumps(data)).is_pending

    def test_non_ascii_text_survives(self) -> None:
        record = _make_record(company_name="Société Générale", job_title="Ingénieur")
        assert AnalysisRecord.from_json(record.to_json()) == record

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(RecordFormatError, match="Invalid record JSON"):
            AnalysisRecord.from_json("{not json")

    def test_missing_field_raises(self) -> None:
        data = json.loads(_make_record().to_json())
        del data["imagePath"]
        with pytest.raises(RecordFormatError, match="imagePath"):
            AnalysisRecord.from_json(json.dumps(data))

    def test_invalid_stored_feedback_raises(self) -> None:
        data = json.loads(_make_record().to_json())
        data["feedback"] = {"overallScore": 10}
        with pytest.raises(RecordFormatError, match="Stored feedback is invalid"):
            AnalysisRecord.from_json(json.dumps(data))


class TestFeedbackTransition:
    def test_with_feedback_returns_new_record(self, feedback_payload: dict[str, Any]) -> None:
        pending = _make_record()
        feedback = validate_and_build(feedback_payload)

        completed = pending.with_feedback(feedback)

        assert completed is not pending
        assert pending.is_pending
        assert completed.feedback == feedback
        assert completed.id == pending.id

    def test_feedback_can_only_be_set_once(self, feedback_payload: dict[str, Any]) -> None:
        feedback = validate_and_build(feedback_payload)
        completed = _make_record().with_feedback(feedback)
        with pytest.raises(ValueError, match="already has feedback"):
            completed.with_feedback(feedback)
