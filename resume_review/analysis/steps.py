import asyncio
from collections.abc import Awaitable, Callable

from resume_review.analysis.exceptions import (
    EnvironmentUnavailableError,
    FeedbackParseError,
    InferenceFailureError,
    InvalidIdentifierError,
    PersistenceVerificationError,
    PersistenceWriteError,
    RasterizationError,
    UploadFailureError,
)
from resume_review.analysis.identifiers import is_valid_id
from resume_review.analysis.models import AnalysisRecord
from resume_review.analysis.navigation import BaseNavigator, review_path
from resume_review.analysis.pipeline import PipelineContext, PipelineStep
from resume_review.analysis.stages import Stage
from resume_review.feedback.exceptions import FeedbackFormatError
from resume_review.feedback.parser import parse_feedback, response_text
from resume_review.inference.base import BaseInferenceClient
from resume_review.logging.logger import Log
from resume_review.raster.models import RasterErrorKind
from resume_review.raster.rasterizer import Rasterizer
from resume_review.storage.base import BaseBlobStore
from resume_review.storage.record_store import RecordStore

Sleep = Callable[[float], Awaitable[None]]


class UploadFileStep(PipelineStep):
    stage = Stage.UPLOADING_FILE
    failure = UploadFailureError
    failure_status = "Error: failed to upload file"

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    async def run(self, context: PipelineContext) -> PipelineContext:
        uploaded = await self._blob_store.upload([context.file])
        if not uploaded:
            raise self.fail("blob store returned no path for the document")
        context.uploaded_file = uploaded
        Log.info(f"Uploaded '{context.file.name}' to {uploaded.path}")
        return context


class ConvertImageStep(PipelineStep):
    stage = Stage.CONVERTING_IMAGE
    failure = RasterizationError

    def __init__(self, rasterizer: Rasterizer) -> None:
        self._rasterizer = rasterizer

    async def run(self, context: PipelineContext) -> PipelineContext:
        result = await self._rasterizer.rasterize(context.file)
        if result.file is None:
            detail = result.error or "Unknown error occurred"
            if result.error_kind is RasterErrorKind.ENVIRONMENT_UNAVAILABLE:
                raise EnvironmentUnavailableError(detail)
            raise RasterizationError(detail)
        context.conversion = result
        return context


class UploadImageStep(PipelineStep):
    stage = Stage.UPLOADING_IMAGE
    failure = UploadFailureError
    failure_status = "Error: failed to upload image"

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    async def run(self, context: PipelineContext) -> PipelineContext:
        conversion = context.conversion
        if conversion is None or conversion.file is None:
            raise ValueError("PipelineContext.conversion must be set before image upload")
        try:
            uploaded = await self._blob_store.upload([conversion.file])
        finally:
            # Nothing downstream displays the preview.
            if conversion.image is not None:
                conversion.image.release()
        if not uploaded:
            raise self.fail("blob store returned no path for the image")
        context.uploaded_image = uploaded
        Log.info(f"Uploaded '{conversion.file.name}' to {uploaded.path}")
        return context


class PrepareRecordStep(PipelineStep):
    stage = Stage.PREPARING_RECORD

    def __init__(self, id_factory: Callable[[], str]) -> None:
        self._id_factory = id_factory

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.uploaded_file is None or context.uploaded_image is None:
            raise ValueError("Both uploads must be done before preparing the record")
        submission = context.submission
        context.record = AnalysisRecord(
            id=self._id_factory(),
            resume_path=context.uploaded_file.path,
            image_path=context.uploaded_image.path,
            company_name=submission.company_name,
            job_title=submission.job_title,
            job_description=submission.job_description,
        )
        Log.info(f"Prepared record {context.record.id}")
        return context


class _SaveRecordStep(PipelineStep):
    failure = PersistenceWriteError

    def __init__(self, record_store: RecordStore) -> None:
        self._record_store = record_store

    async def _save(self, record: AnalysisRecord) -> None:
        acknowledged = await self._record_store.save(record)
        if not acknowledged:
            raise self.fail(f"write of {record.key} was not acknowledged")


class SaveInitialRecordStep(_SaveRecordStep):
    stage = Stage.SAVING_INITIAL_RECORD

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = context.require_record()
        await self._save(record)
        Log.info(f"Saved pending record {record.key}")
        return context


class RequestAnalysisStep(PipelineStep):
    stage = Stage.REQUESTING_ANALYSIS
    failure = InferenceFailureError

    def __init__(
        self,
        inference: BaseInferenceClient,
        instructions_builder: Callable[[str, str], str],
    ) -> None:
        self._inference = inference
        self._instructions_builder = instructions_builder

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = context.require_record()
        instructions = self._instructions_builder(record.job_title, record.job_description)
        response = await self._inference.feedback(record.resume_path, instructions)
        if not response:
            raise self.fail("inference provider returned no response")
        context.response = response
        Log.info(f"Received analysis for record {record.id}")
        return context


class ParseFeedbackStep(PipelineStep):
    stage = Stage.PARSING_FEEDBACK
    failure = FeedbackParseError

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.response is None:
            raise ValueError("PipelineContext.response must be set before parsing")
        try:
            text = response_text(context.response)
            Log.debug(f"AI raw response:\n{text}")
            context.feedback = parse_feedback(text)
        except FeedbackFormatError as exc:
            raise self.fail(str(exc)) from exc
        return context


class SaveFinalRecordStep(_SaveRecordStep):
    stage = Stage.SAVING_FINAL_RECORD

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.feedback is None:
            raise ValueError("PipelineContext.feedback must be set before the final save")
        record = context.require_record().with_feedback(context.feedback)
        await self._save(record)
        context.record = record
        Log.info(f"Saved feedback for record {record.key}")
        return context


class VerifyRecordStep(PipelineStep):
    stage = Stage.VERIFYING_RECORD
    failure = PersistenceVerificationError

    def __init__(
        self,
        record_store: RecordStore,
        settle_seconds: float,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._record_store = record_store
        self._settle_seconds = settle_seconds
        self._sleep = sleep

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = context.require_record()
        Log.debug(f"Waiting {self._settle_seconds}s before verifying {record.key}")
        await self._sleep(self._settle_seconds)
        stored = await self._record_store.read_raw(record.id)
        if not stored:
            raise self.fail(f"{record.key} could not be read back after saving")
        if not is_valid_id(record.id):
            raise InvalidIdentifierError(f"invalid record id {record.id!r}")
        return context


class NavigateStep(PipelineStep):
    stage = Stage.NAVIGATING

    def __init__(
        self,
        navigator: BaseNavigator,
        delay_seconds: float,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._navigator = navigator
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    async def run(self, context: PipelineContext) -> PipelineContext:
        record_id = context.require_record().id
        await self._sleep(self._delay_seconds)
        context.review_path = review_path(record_id)
        self._navigator.navigate(context.review_path)
        return context
