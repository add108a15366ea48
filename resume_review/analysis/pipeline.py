from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from resume_review.analysis.exceptions import PipelineError
from resume_review.analysis.models import AnalysisRecord, Submission
from resume_review.analysis.stages import Stage
from resume_review.feedback.models import Feedback
from resume_review.inference.models import InferenceResponse
from resume_review.raster.models import ConversionResult, DocumentFile
from resume_review.storage.models import UploadedBlob


@dataclass(slots=True)
class PipelineContext:
    submission: Submission
    uploaded_file: UploadedBlob | None = None
    conversion: ConversionResult | None = None
    uploaded_image: UploadedBlob | None = None
    record: AnalysisRecord | None = None
    response: InferenceResponse | None = None
    feedback: Feedback | None = None
    review_path: str = ""

    @property
    def file(self) -> DocumentFile:
        if self.submission.file is None:
            raise ValueError("PipelineContext.submission.file must be set")
        return self.submission.file

    def require_record(self) -> AnalysisRecord:
        if self.record is None:
            raise ValueError("PipelineContext.record must be set before this stage")
        return self.record


class PipelineStep(ABC):
    """One stage of the analysis pipeline.

    ``run`` raises a PipelineError to abort; any other exception is wrapped
    into ``failure`` by the controller.
    """

    stage: ClassVar[Stage]
    failure: ClassVar[type[PipelineError]] = PipelineError
    failure_status: ClassVar[str | None] = None

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def fail(self, detail: str = "") -> PipelineError:
        return self.failure(detail, status=self.failure_status)


@dataclass(frozen=True)
class Completed:
    record: AnalysisRecord
    review_path: str


@dataclass(frozen=True)
class Aborted:
    stage: Stage
    error: PipelineError

    @property
    def status(self) -> str:
        return self.error.status


PipelineOutcome = Completed | Aborted
