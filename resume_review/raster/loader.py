import asyncio
from collections.abc import Callable
from enum import Enum

from resume_review.config.settings import Settings
from resume_review.logging.logger import Log
from resume_review.raster.base import BaseDocumentEngine
from resume_review.raster.factory import DocumentEngineFactory


class LoaderState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class EngineLoader:
    """Loads a document engine at most once and hands every caller the same instance.

    Callers arriving while the first load is in flight await the same task.
    A failed load returns the loader to UNINITIALIZED so a later call can retry.
    """

    def __init__(self, factory: Callable[[], BaseDocumentEngine]) -> None:
        self._factory = factory
        self._engine: BaseDocumentEngine | None = None
        self._pending: asyncio.Task[BaseDocumentEngine] | None = None

    @property
    def state(self) -> LoaderState:
        if self._engine is not None:
            return LoaderState.READY
        if self._pending is not None:
            return LoaderState.INITIALIZING
        return LoaderState.UNINITIALIZED

    async def load(self) -> BaseDocumentEngine:
        if self._engine is not None:
            return self._engine
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._initialize())
        return await asyncio.shield(self._pending)

    async def _initialize(self) -> BaseDocumentEngine:
        Log.info("Loading document engine")
        try:
            engine = await asyncio.to_thread(self._factory)
        except Exception as exc:
            self._pending = None
            Log.error(f"Document engine failed to load: {exc}")
            raise
        self._engine = engine
        self._pending = None
        Log.info(f"Document engine ready: {type(engine).__name__}")
        return engine


_loader: EngineLoader | None = None


def get_engine_loader(settings: Settings) -> EngineLoader:
    """Return the process-wide engine loader, creating it on first use."""
    global _loader  # noqa: PLW0603
    if _loader is None:
        _loader = EngineLoader(lambda: DocumentEngineFactory.create(settings))
    return _loader


def reset_engine_loader() -> None:
    """Forget the process-wide loader and any engine it holds."""
    global _loader  # noqa: PLW0603
    _loader = None
