from collections.abc import Callable

from resume_review.analysis.exceptions import PipelineError
from resume_review.analysis.identifiers import new_id
from resume_review.analysis.models import Submission
from resume_review.analysis.navigation import BaseNavigator
from resume_review.analysis.pipeline import (
    Aborted,
    Completed,
    PipelineContext,
    PipelineOutcome,
    PipelineStep,
)
from resume_review.analysis.stages import PipelineState, StatusChannel
from resume_review.analysis.steps import (
    ConvertImageStep,
    NavigateStep,
    ParseFeedbackStep,
    PrepareRecordStep,
    RequestAnalysisStep,
    SaveFinalRecordStep,
    SaveInitialRecordStep,
    Sleep,
    UploadFileStep,
    UploadImageStep,
    VerifyRecordStep,
)
from resume_review.config.settings import Settings
from resume_review.feedback.instructions import prepare_instructions
from resume_review.inference.base import BaseInferenceClient
from resume_review.logging.logger import Log
from resume_review.raster.rasterizer import Rasterizer
from resume_review.storage.base import BaseBlobStore
from resume_review.storage.record_store import RecordStore


class AnalysisController:
    """Runs a submission through the analysis pipeline.

    Pipeline: upload -> rasterize -> upload image -> prepare record -> save ->
    analyze -> parse -> save -> verify -> navigate.

    A failing stage stops the run and reports its status; nothing is retried
    and earlier writes are left in place.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        status: StatusChannel | None = None,
    ) -> None:
        self._steps = steps
        self._status = status if status is not None else StatusChannel()

    @property
    def status(self) -> StatusChannel:
        return self._status

    @property
    def state(self) -> PipelineState:
        return self._status.state

    async def submit(self, submission: Submission) -> PipelineOutcome | None:
        """Start a run from the upload form."""
        return await self.run(submission)

    async def run(self, submission: Submission) -> PipelineOutcome | None:
        """Run the pipeline once.

        A submission without a file, or one arriving while a run is in
        progress, is ignored and returns None.
        """
        if submission.file is None:
            return None
        if self.state.is_processing:
            Log.warning("Analysis already in progress, ignoring submission")
            return None

        self._status.begin()
        try:
            return await self._run_steps(PipelineContext(submission=submission))
        finally:
            self._status.release()

    async def _run_steps(self, context: PipelineContext) -> PipelineOutcome:
        Log.info(f"Starting analysis of '{context.file.name}'")
        for step in self._steps:
            self._status.advance(step.stage)
            Log.info(f"Stage {step.stage.value}")
            try:
                context = await step.run(context)
            except PipelineError as exc:
                return self._abort(step, exc)
            except Exception as exc:
                Log.exception(f"Unexpected error in stage {step.stage.value}: {exc}")
                return self._abort(step, step.fail(str(exc)))

        record = context.require_record()
        self._status.finish()
        Log.info(f"Analysis of record {record.id} completed")
        return Completed(record=record, review_path=context.review_path)

    def _abort(self, step: PipelineStep, error: PipelineError) -> Aborted:
        Log.error(f"Stage {step.stage.value} failed: {error}")
        self._status.fail(error.status)
        return Aborted(stage=step.stage, error=error)


def build_controller(
    settings: Settings,
    *,
    blob_store: BaseBlobStore,
    record_store: RecordStore,
    inference: BaseInferenceClient,
    rasterizer: Rasterizer,
    navigator: BaseNavigator,
    status: StatusChannel | None = None,
    id_factory: Callable[[], str] = new_id,
    instructions_builder: Callable[[str, str], str] = prepare_instructions,
    sleep: Sleep | None = None,
) -> AnalysisController:
    """Build an AnalysisController with the standard stage sequence."""
    delay_kwargs = {"sleep": sleep} if sleep is not None else {}
    steps: list[PipelineStep] = [
        UploadFileStep(blob_store),
        ConvertImageStep(rasterizer),
        UploadImageStep(blob_store),
        PrepareRecordStep(id_factory),
        SaveInitialRecordStep(record_store),
        RequestAnalysisStep(inference, instructions_builder),
        ParseFeedbackStep(),
        SaveFinalRecordStep(record_store),
        VerifyRecordStep(record_store, settings.verify_settle_seconds, **delay_kwargs),
        NavigateStep(navigator, settings.navigation_delay_seconds, **delay_kwargs),
    ]
    return AnalysisController(steps=steps, status=status)
