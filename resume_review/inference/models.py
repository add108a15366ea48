from dataclasses import dataclass


@dataclass(frozen=True)
class ContentPart:
    """One element of a multi-part message payload."""

    text: str
    type: str = "text"


@dataclass(frozen=True)
class InferenceMessage:
    content: str | list[ContentPart]
    role: str = "assistant"


@dataclass(frozen=True)
class InferenceResponse:
    """Provider-neutral reply to a feedback request."""

    message: InferenceMessage
