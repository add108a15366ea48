"""Read path for the per-record review view."""

import asyncio
from dataclasses import dataclass

from resume_review.analysis.models import AnalysisRecord, RecordFormatError
from resume_review.analysis.navigation import login_path, review_path
from resume_review.analysis.steps import Sleep
from resume_review.auth.base import BaseAuthenticator
from resume_review.feedback.models import Feedback
from resume_review.logging.logger import Log
from resume_review.storage.base import BaseBlobStore
from resume_review.storage.record_store import RecordStore


@dataclass
class ReviewState:
    """Everything the review view could load for one record.

    Missing pieces stay None; ``error`` describes why loading stopped early.
    """

    record_id: str
    redirect: str | None = None
    record: AnalysisRecord | None = None
    resume_bytes: bytes | None = None
    image_bytes: bytes | None = None
    error: str | None = None

    @property
    def feedback(self) -> Feedback | None:
        return self.record.feedback if self.record is not None else None

    @property
    def is_complete(self) -> bool:
        return (
            self.resume_bytes is not None
            and self.image_bytes is not None
            and self.feedback is not None
        )


class ReviewLoader:
    def __init__(
        self,
        auth: BaseAuthenticator,
        record_store: RecordStore,
        blob_store: BaseBlobStore,
        settle_seconds: float = 0.2,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._auth = auth
        self._record_store = record_store
        self._blob_store = blob_store
        self._settle_seconds = settle_seconds
        self._sleep = sleep

    async def load(self, record_id: str) -> ReviewState:
        state = ReviewState(record_id=record_id)
        if not self._auth.is_authenticated:
            Log.info("User not authenticated, redirecting to login")
            state.redirect = login_path(review_path(record_id))
            return state

        Log.info(f"Loading resume with id: {record_id}")
        await self._sleep(self._settle_seconds)

        try:
            raw = await self._record_store.read_raw(record_id)
        except Exception as exc:
            return self._stop(state, f"Failed to read resume {record_id}: {exc}")
        if raw is None:
            return self._stop(state, f"Resume not found for id: {record_id}")
        try:
            state.record = AnalysisRecord.from_json(raw)
        except RecordFormatError as exc:
            return self._stop(state, f"Stored resume {record_id} is unreadable: {exc}")

        state.resume_bytes = await self._read_blob(state.record.resume_path)
        if state.resume_bytes is None:
            return self._stop(state, "Failed to read resume blob")

        state.image_bytes = await self._read_blob(state.record.image_path)
        if state.image_bytes is None:
            return self._stop(state, "Failed to read image blob")

        if state.feedback is None:
            Log.info(f"Resume {record_id} is still waiting for analysis results")
        return state

    async def _read_blob(self, path: str) -> bytes | None:
        try:
            data = await self._blob_store.read(path)
        except Exception as exc:
            Log.error(f"Error reading blob {path}: {exc}")
            return None
        return data or None

    @staticmethod
    def _stop(state: ReviewState, message: str) -> ReviewState:
        Log.error(message)
        state.error = message
        return state
