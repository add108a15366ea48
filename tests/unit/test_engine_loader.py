import asyncio
import time
from unittest.mock import MagicMock

import pytest

from resume_review.raster.base import BaseDocumentEngine
from resume_review.raster.loader import (
    EngineLoader,
    LoaderState,
    get_engine_loader,
    reset_engine_loader,
)


class TestEngineLoader:
    def test_starts_uninitialized(self) -> None:
        loader = EngineLoader(MagicMock())
        assert loader.state is LoaderState.UNINITIALIZED

    def test_concurrent_first_loads_initialize_once(self) -> None:
        engine = MagicMock(spec=BaseDocumentEngine)
        calls: list[int] = []

        def factory() -> BaseDocumentEngine:
            calls.append(1)
            time.sleep(0.05)
            return engine

        loader = EngineLoader(factory)

        async def scenario() -> list[BaseDocumentEngine]:
            return await asyncio.gather(*(loader.load() for _ in range(5)))

        results = asyncio.run(scenario())

        assert len(calls) == 1
        assert all(result is engine for result in results)
        assert loader.state is LoaderState.READY

    def test_reports_initializing_while_load_in_flight(self) -> None:
        loader = EngineLoader(lambda: MagicMock(spec=BaseDocumentEngine))

        async def scenario() -> LoaderState:
            task = asyncio.ensure_future(loader.load())
            await asyncio.sleep(0)
            state = loader.state
            await task
            return state

        assert asyncio.run(scenario()) is LoaderState.INITIALIZING

    def test_later_loads_reuse_engine(self) -> None:
        factory = MagicMock(return_value=MagicMock(spec=BaseDocumentEngine))
        loader = EngineLoader(factory)

        first = asyncio.run(loader.load())
        second = asyncio.run(loader.load())

        assert first is second
        factory.assert_called_once_with()

    def test_failed_load_resets_and_allows_retry(self) -> None:
        engine = MagicMock(spec=BaseDocumentEngine)
        factory = MagicMock(side_effect=[ImportError("no engine"), engine])
        loader = EngineLoader(factory)

        with pytest.raises(ImportError, match="no engine"):
            asyncio.run(loader.load())
        assert loader.state is LoaderState.UNINITIALIZED

        assert asyncio.run(loader.load()) is engine
        assert factory.call_count == 2

    def test_concurrent_callers_all_see_failure(self) -> None:
        loader = EngineLoader(MagicMock(side_effect=RuntimeError("boom")))

        async def scenario() -> list[object]:
            return await asyncio.gather(
                *(loader.load() for _ in range(3)), return_exceptions=True
            )

        results = asyncio.run(scenario())

        assert all(isinstance(r, RuntimeError) for r in results)
        assert loader.state is LoaderState.UNINITIALIZED


class TestProcessWideLoader:
    def test_returns_same_loader(self) -> None:
        settings = MagicMock(pdf_engine="pymupdf")
        assert get_engine_loader(settings) is get_engine_loader(settings)

    def test_reset_forgets_loader(self) -> None:
        settings = MagicMock(pdf_engine="pymupdf")
        first = get_engine_loader(settings)
        reset_engine_loader()
        assert get_engine_loader(settings) is not first
