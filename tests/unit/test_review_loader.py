import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from resume_review.analysis.models import AnalysisRecord
from resume_review.analysis.review import ReviewLoader
from resume_review.auth.static_authenticator import StaticAuthenticator
from resume_review.feedback.validator import validate_and_build
from resume_review.storage.base import BaseBlobStore
from resume_review.storage.memory_kv_store import InMemoryKeyValueStore
from resume_review.storage.record_store import RecordStore

RECORD_ID = "rec-1"


def _record(**overrides: Any) -> AnalysisRecord:
    fields: dict[str, Any] = {
        "id": RECORD_ID,
        "resume_path": "a/resume.pdf",
        "image_path": "b/resume.png",
        "company_name": "Acme",
        "job_title": "Engineer",
        "job_description": "Build things",
    }
    fields.update(overrides)
    return AnalysisRecord(**fields)


def _blob_store(blobs: dict[str, bytes]) -> MagicMock:
    store = MagicMock(spec=BaseBlobStore)
    store.read = AsyncMock(side_effect=lambda path: blobs.get(path))
    return store


def _loader(
    kv: InMemoryKeyValueStore,
    blob_store: MagicMock,
    *,
    authenticated: bool = True,
) -> tuple[ReviewLoader, AsyncMock]:
    sleep = AsyncMock()
    loader = ReviewLoader(
        StaticAuthenticator(authenticated),
        RecordStore(kv),
        blob_store,
        settle_seconds=0.2,
        sleep=sleep,
    )
    return loader, sleep


def _stored(record: AnalysisRecord) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore({record.key: record.to_json()})


BLOBS = {"a/resume.pdf": b"%PDF", "b/resume.png": b"\x89PNG"}


class TestReviewLoader:
    def test_unauthenticated_user_is_redirected(self) -> None:
        blob_store = _blob_store(BLOBS)
        loader, sleep = _loader(_stored(_record()), blob_store, authenticated=False)

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.redirect == f"/auth?next=/resume/{RECORD_ID}"
        assert state.record is None
        sleep.assert_not_awaited()
        blob_store.read.assert_not_awaited()

    def test_loads_completed_record(self, feedback_payload: dict[str, Any]) -> None:
        record = _record(feedback=validate_and_build(feedback_payload))
        loader, sleep = _loader(_stored(record), _blob_store(BLOBS))

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.record == record
        assert state.resume_bytes == b"%PDF"
        assert state.image_bytes == b"\x89PNG"
        assert state.feedback == record.feedback
        assert state.is_complete
        assert state.error is None
        sleep.assert_awaited_once_with(0.2)

    def test_pending_record_has_no_feedback(self) -> None:
        loader, _ = _loader(_stored(_record()), _blob_store(BLOBS))

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.feedback is None
        assert not state.is_complete
        assert state.error is None

    def test_missing_record(self) -> None:
        blob_store = _blob_store(BLOBS)
        loader, _ = _loader(InMemoryKeyValueStore(), blob_store)

        state = asyncio.run(loader.load("unknown"))

        assert state.record is None
        assert state.error == "Resume not found for id: unknown"
        blob_store.read.assert_not_awaited()

    def test_unreadable_record(self) -> None:
        loader, _ = _loader(
            InMemoryKeyValueStore({f"resume:{RECORD_ID}": "{broken"}), _blob_store(BLOBS)
        )

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.record is None
        assert state.error is not None

    def test_store_exception_is_reported(self) -> None:
        kv = InMemoryKeyValueStore()
        kv.get = AsyncMock(side_effect=ConnectionError("down"))  # type: ignore[method-assign]
        loader, _ = _loader(kv, _blob_store(BLOBS))

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.record is None
        assert state.error is not None
        assert "down" in state.error

    def test_missing_resume_blob_skips_image(self, feedback_payload: dict[str, Any]) -> None:
        record = _record(feedback=validate_and_build(feedback_payload))
        blob_store = _blob_store({"b/resume.png": b"\x89PNG"})
        loader, _ = _loader(_stored(record), blob_store)

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.error == "Failed to read resume blob"
        assert state.image_bytes is None
        assert state.feedback == record.feedback
        blob_store.read.assert_awaited_once_with("a/resume.pdf")

    def test_missing_image_blob(self) -> None:
        loader, _ = _loader(_stored(_record()), _blob_store({"a/resume.pdf": b"%PDF"}))

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.resume_bytes == b"%PDF"
        assert state.image_bytes is None
        assert state.error == "Failed to read image blob"

    def test_blob_exception_is_contained(self) -> None:
        blob_store = MagicMock(spec=BaseBlobStore)
        blob_store.read = AsyncMock(side_effect=OSError("io"))
        loader, _ = _loader(_stored(_record()), blob_store)

        state = asyncio.run(loader.load(RECORD_ID))

        assert state.error == "Failed to read resume blob"
