from resume_review.storage.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Process-local key-value store. Useful for development and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    def keys(self) -> list[str]:
        return sorted(self._data)
