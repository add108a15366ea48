from resume_review.inference.base import BaseInferenceClient
from resume_review.inference.factory import InferenceClientFactory
from resume_review.inference.models import ContentPart, InferenceMessage, InferenceResponse

__all__ = [
    "BaseInferenceClient",
    "ContentPart",
    "InferenceClientFactory",
    "InferenceMessage",
    "InferenceResponse",
]
