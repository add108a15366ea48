from resume_review.analysis.models import AnalysisRecord, record_key
from resume_review.storage.base import BaseKeyValueStore


class RecordStore:
    """Reads and writes AnalysisRecords through a key-value store."""

    def __init__(self, kv: BaseKeyValueStore) -> None:
        self._kv = kv

    async def save(self, record: AnalysisRecord) -> bool:
        """Write the whole record under ``resume:<id>``."""
        return await self._kv.set(record.key, record.to_json())

    async def read_raw(self, record_id: str) -> str | None:
        """Return the stored text for a record, or None if absent/empty."""
        value = await self._kv.get(record_key(record_id))
        return value or None

    async def load(self, record_id: str) -> AnalysisRecord | None:
        """Return the parsed record, or None if absent.

        Raises:
            RecordFormatError: if the stored text cannot be parsed.
        """
        raw = await self.read_raw(record_id)
        if raw is None:
            return None
        return AnalysisRecord.from_json(raw)
