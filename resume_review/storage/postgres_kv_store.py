import asyncio

from resume_review.database.repositories.kv_repository import KeyValueRepository
from resume_review.storage.base import BaseKeyValueStore


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value store backed by the kv_store table.

    Requires ``init_pool`` to have been called.
    """

    def __init__(self, repository: KeyValueRepository | None = None) -> None:
        self._repository = repository if repository is not None else KeyValueRepository()

    async def set(self, key: str, value: str) -> bool:
        await asyncio.to_thread(self._repository.upsert, key, value)
        return True

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._repository.find, key)
