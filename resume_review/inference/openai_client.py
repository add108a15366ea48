import asyncio

import httpx
import openai

from resume_review.inference.base import BaseInferenceClient
from resume_review.inference.exceptions import InferenceError, InferenceNetworkError
from resume_review.inference.models import InferenceMessage, InferenceResponse
from resume_review.logging.logger import Log
from resume_review.raster.loader import EngineLoader
from resume_review.storage.base import BaseBlobStore


class OpenAIInferenceClient(BaseInferenceClient):
    """Feedback provider built on the OpenAI-compatible chat API.

    The stored PDF is read back from the blob store and its text is sent
    as the user message; the instructions go in the system message.
    """

    def __init__(
        self,
        *,
        blob_store: BaseBlobStore,
        engine_loader: EngineLoader,
        api_key: str,
        model: str,
        timeout_seconds: int,
        temperature: float = 0.0,
        base_url: str | None = None,
    ) -> None:
        self._blob_store = blob_store
        self._engine_loader = engine_loader
        self._model = model
        self._temperature = temperature
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def feedback(self, document_path: str, instructions: str) -> InferenceResponse | None:
        resume_text = await self._document_text(document_path)
        Log.debug(f"Requesting feedback for {document_path} ({len(resume_text)} chars)")
        content = await asyncio.to_thread(self._create_chat_completion, instructions, resume_text)
        return InferenceResponse(message=InferenceMessage(content=content))

    async def _document_text(self, document_path: str) -> str:
        data = await self._blob_store.read(document_path)
        if not data:
            raise InferenceError(f"Document not found: {document_path}")
        engine = await self._engine_loader.load()
        text = await asyncio.to_thread(engine.extract_text, data)
        if not text:
            raise InferenceError(f"No text could be extracted from {document_path}")
        return text

    def _create_chat_completion(self, instructions: str, resume_text: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": resume_text},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise InferenceError("AI returned empty response")
        return content
