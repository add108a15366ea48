"""Pipeline stages, their status messages and the transition table."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from resume_review.analysis.exceptions import IllegalTransitionError
from resume_review.logging.logger import Log


class Stage(str, Enum):
    IDLE = "idle"
    UPLOADING_FILE = "uploading_file"
    CONVERTING_IMAGE = "converting_image"
    UPLOADING_IMAGE = "uploading_image"
    PREPARING_RECORD = "preparing_record"
    SAVING_INITIAL_RECORD = "saving_initial_record"
    REQUESTING_ANALYSIS = "requesting_analysis"
    PARSING_FEEDBACK = "parsing_feedback"
    SAVING_FINAL_RECORD = "saving_final_record"
    VERIFYING_RECORD = "verifying_record"
    NAVIGATING = "navigating"


STATUS_TEXT: dict[Stage, str] = {
    Stage.IDLE: "",
    Stage.UPLOADING_FILE: "Uploading the file...",
    Stage.CONVERTING_IMAGE: "Converting to image...",
    Stage.UPLOADING_IMAGE: "Uploading the image...",
    Stage.PREPARING_RECORD: "Preparing data...",
    Stage.SAVING_INITIAL_RECORD: "Saving resume data...",
    Stage.REQUESTING_ANALYSIS: "Analyzing...",
    Stage.PARSING_FEEDBACK: "Reading analysis results...",
    Stage.SAVING_FINAL_RECORD: "Saving analysis results...",
    Stage.VERIFYING_RECORD: "Verifying saved data...",
    Stage.NAVIGATING: "Analysis complete, redirecting...",
}

NEXT_STAGE: dict[Stage, Stage] = {
    Stage.IDLE: Stage.UPLOADING_FILE,
    Stage.UPLOADING_FILE: Stage.CONVERTING_IMAGE,
    Stage.CONVERTING_IMAGE: Stage.UPLOADING_IMAGE,
    Stage.UPLOADING_IMAGE: Stage.PREPARING_RECORD,
    Stage.PREPARING_RECORD: Stage.SAVING_INITIAL_RECORD,
    Stage.SAVING_INITIAL_RECORD: Stage.REQUESTING_ANALYSIS,
    Stage.REQUESTING_ANALYSIS: Stage.PARSING_FEEDBACK,
    Stage.PARSING_FEEDBACK: Stage.SAVING_FINAL_RECORD,
    Stage.SAVING_FINAL_RECORD: Stage.VERIFYING_RECORD,
    Stage.VERIFYING_RECORD: Stage.NAVIGATING,
    Stage.NAVIGATING: Stage.IDLE,
}

PIPELINE_ORDER: tuple[Stage, ...] = tuple(s for s in NEXT_STAGE if s is not Stage.IDLE)


def can_transition(current: Stage, target: Stage) -> bool:
    """Forward by one stage, or back to IDLE from any active stage."""
    if NEXT_STAGE[current] is target:
        return True
    return target is Stage.IDLE and current is not Stage.IDLE


@dataclass(frozen=True)
class PipelineState:
    """What the user sees of a pipeline run."""

    stage: Stage = Stage.IDLE
    status_text: str = ""
    is_processing: bool = False
    error: str | None = None


StatusListener = Callable[[PipelineState], None]


class StatusChannel:
    """Owns the pipeline state and publishes every change to listeners."""

    def __init__(self, listeners: list[StatusListener] | None = None) -> None:
        self._state = PipelineState()
        self._listeners = list(listeners or [])
        self.history: list[str] = []

    @property
    def state(self) -> PipelineState:
        return self._state

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def begin(self) -> None:
        if self._state.stage is not Stage.IDLE:
            raise IllegalTransitionError(f"Cannot start a run while in {self._state.stage.value}")
        self._state = replace(self._state, is_processing=True, error=None)

    def advance(self, stage: Stage) -> None:
        self._move(stage)
        self._publish(replace(self._state, stage=stage, status_text=STATUS_TEXT[stage]))

    def fail(self, message: str) -> None:
        """Abort to IDLE with an error status."""
        self._move(Stage.IDLE)
        self._publish(
            PipelineState(stage=Stage.IDLE, status_text=message, is_processing=False, error=message)
        )

    def finish(self) -> None:
        """Return to IDLE after a completed run; the last status text stays visible."""
        self._move(Stage.IDLE)
        self._publish(replace(self._state, stage=Stage.IDLE, is_processing=False))

    def release(self) -> None:
        """Clear the processing flag if a run exits without fail() or finish()."""
        if self._state.is_processing:
            self._state = replace(self._state, stage=Stage.IDLE, is_processing=False)

    def _move(self, target: Stage) -> None:
        current = self._state.stage
        if not can_transition(current, target):
            raise IllegalTransitionError(
                f"Illegal stage transition {current.value} -> {target.value}"
            )

    def _publish(self, state: PipelineState) -> None:
        changed = state.status_text != self._state.status_text
        self._state = state
        if changed and state.status_text:
            self.history.append(state.status_text)
        Log.debug(f"Pipeline stage={state.stage.value} status={state.status_text!r}")
        for listener in self._listeners:
            listener(state)
