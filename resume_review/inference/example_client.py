"""Offline inference client.

Use this module as a reference when implementing new provider clients.
Implement BaseInferenceClient and register the provider in InferenceClientFactory.
"""

import json
from typing import ClassVar

from resume_review.inference.base import BaseInferenceClient
from resume_review.inference.models import ContentPart, InferenceMessage, InferenceResponse


class ExampleInferenceClient(BaseInferenceClient):
    """Returns a fixed, valid feedback payload without any network calls.

    The payload is delivered as a list of content parts, the shape some
    providers use for multi-part replies.
    """

    DEFAULT_FEEDBACK: ClassVar[dict[str, object]] = {
        "overallScore": 72,
        "ATS": {
            "score": 80,
            "tips": [
                {"type": "good", "tip": "Standard section headings"},
                {"type": "improve", "tip": "Mirror more keywords from the job description"},
            ],
        },
        "toneAndStyle": {
            "score": 70,
            "tips": [
                {
                    "type": "improve",
                    "tip": "Use stronger action verbs",
                    "explanation": "Start bullet points with verbs such as 'built' or 'led'.",
                }
            ],
        },
        "content": {
            "score": 68,
            "tips": [
                {
                    "type": "improve",
                    "tip": "Quantify achievements",
                    "explanation": "Add numbers that show the impact of your work.",
                }
            ],
        },
        "structure": {
            "score": 75,
            "tips": [
                {
                    "type": "good",
                    "tip": "Clear layout",
                    "explanation": "Sections are easy to scan.",
                }
            ],
        },
        "skills": {
            "score": 66,
            "tips": [
                {
                    "type": "improve",
                    "tip": "Group skills by area",
                    "explanation": "Separate languages, frameworks and tools.",
                }
            ],
        },
    }

    async def feedback(self, document_path: str, instructions: str) -> InferenceResponse | None:
        _ = document_path, instructions
        return InferenceResponse(
            message=InferenceMessage(content=[ContentPart(text=json.dumps(self.DEFAULT_FEEDBACK))])
        )
