from typing import ClassVar

from resume_review.config.settings import Settings
from resume_review.inference.base import BaseInferenceClient
from resume_review.inference.example_client import ExampleInferenceClient
from resume_review.inference.openai_client import OpenAIInferenceClient
from resume_review.raster.loader import EngineLoader
from resume_review.storage.base import BaseBlobStore


class InferenceClientFactory:
    """Creates the configured feedback provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    DEFAULT_MODELS: ClassVar[dict[str, str]] = {
        "openai": "gpt-4o-mini",
    }

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        blob_store: BaseBlobStore,
        engine_loader: EngineLoader,
    ) -> BaseInferenceClient:
        provider = settings.inference_provider.lower()
        if provider == "example":
            return ExampleInferenceClient()
        base_url = cls._resolve_base_url(provider, settings)
        model = settings.inference_model_name.strip() or cls.DEFAULT_MODELS.get(provider, "")
        if not model:
            raise ValueError(f"inference_model_name is required for inference_provider={provider}")
        return OpenAIInferenceClient(
            blob_store=blob_store,
            engine_loader=engine_loader,
            api_key=settings.inference_api_key,
            model=model,
            timeout_seconds=settings.inference_timeout_seconds,
            temperature=settings.inference_temperature,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.inference_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "inference_base_url is required for inference_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown inference provider '{provider}'. Choose from: {supported}")
