from resume_review.config.settings import Settings
from resume_review.database.connection import init_pool
from resume_review.database.repositories.kv_repository import KeyValueRepository
from resume_review.storage.base import BaseKeyValueStore
from resume_review.storage.memory_kv_store import InMemoryKeyValueStore
from resume_review.storage.postgres_kv_store import PostgresKeyValueStore


class KeyValueStoreFactory:
    """Creates the configured key-value store."""

    BACKENDS = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.kv_backend.lower()
        if backend == "memory":
            return InMemoryKeyValueStore()
        if backend == "postgres":
            init_pool(settings)
            repository = KeyValueRepository()
            repository.ensure_table()
            return PostgresKeyValueStore(repository)
        raise ValueError(f"Unknown key-value backend '{backend}'. Choose from: {list(cls.BACKENDS)}")
