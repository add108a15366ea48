from typing import ClassVar


class PipelineError(Exception):
    """Base exception for analysis pipeline stage failures.

    ``status`` is the message shown to the user when the stage aborts.
    """

    default_status: ClassVar[str] = "Error: an unexpected error occurred"
    include_detail: ClassVar[bool] = False

    def __init__(self, detail: str = "", *, status: str | None = None) -> None:
        self.detail = detail
        if status is None:
            status = self.default_status
            if self.include_detail and detail:
                status = f"{status} - {detail}"
        self.status = status
        super().__init__(detail or status)


class EnvironmentUnavailableError(PipelineError):
    """Raised when no rendering environment is available for rasterization."""

    default_status = "Error: failed to convert PDF to image"
    include_detail = True


class RasterizationError(PipelineError):
    """Raised when a document-to-image conversion sub-stage fails."""

    default_status = "Error: failed to convert PDF to image"
    include_detail = True


class UploadFailureError(PipelineError):
    """Raised when the blob store does not accept the document or its image."""

    default_status = "Error: failed to upload file"


class PersistenceWriteError(PipelineError):
    """Raised when writing the record to the key-value store fails."""

    default_status = "Error: failed to save resume data"
    include_detail = True


class InferenceFailureError(PipelineError):
    """Raised when the inference provider fails or returns nothing."""

    default_status = "Error: failed to analyze resume"


class FeedbackParseError(PipelineError):
    """Raised when the inference response is not valid structured feedback."""

    default_status = "Error: failed to parse analysis results"


class PersistenceVerificationError(PipelineError):
    """Raised when a record cannot be read back after a reported-successful write."""

    default_status = "Error: failed to save resume data"


class InvalidIdentifierError(PipelineError):
    """Raised when the record id is unusable for navigation."""

    default_status = "Error: Invalid resume ID generated"


class IllegalTransitionError(RuntimeError):
    """Raised when the pipeline attempts a stage change the transition table forbids."""
