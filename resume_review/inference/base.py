from abc import ABC, abstractmethod

from resume_review.inference.models import InferenceResponse


class BaseInferenceClient(ABC):
    """Contract for résumé evaluation providers."""

    @abstractmethod
    async def feedback(self, document_path: str, instructions: str) -> InferenceResponse | None:
        """Evaluate the stored document at ``document_path``.

        Args:
            document_path: Blob-store path of the uploaded résumé.
            instructions: Evaluation instructions, including the expected response format.

        Returns:
            The provider's reply, or None if it produced nothing.

        Raises:
            InferenceError: on provider failure.
        """
