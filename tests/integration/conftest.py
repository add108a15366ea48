import os
from collections.abc import Generator

import psycopg
import pytest

from resume_review.config.settings import Settings
from resume_review.database.connection import close_pool, conninfo_from_settings, init_pool
from resume_review.database.repositories.kv_repository import KeyValueRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "resume_review_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(conninfo_from_settings(test_settings), connect_timeout=3):
            pass
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one.")
    init_pool(test_settings)
    try:
        KeyValueRepository().ensure_table()
        yield
    finally:
        close_pool()


@pytest.fixture
def kv_repository(integration_pool: None) -> Generator[KeyValueRepository, None, None]:
    repository = KeyValueRepository()
    created: list[str] = []
    original_upsert = repository.upsert

    def tracking_upsert(key: str, value: str) -> None:
        created.append(key)
        original_upsert(key, value)

    repository.upsert = tracking_upsert  # type: ignore[method-assign]
    yield repository
    for key in created:
        repository.delete(key)
