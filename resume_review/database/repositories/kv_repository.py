from resume_review.database.connection import get_connection


class KeyValueRepository:
    """Database operations for the kv_store table."""

    def ensure_table(self) -> None:
        """Create the kv_store table if it does not exist."""
        with get_connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            )
            conn.commit()

    def upsert(self, key: str, value: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (key)
                DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
                """,
                (key, value),
            )
            conn.commit()

    def find(self, key: str) -> str | None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                row = cur.fetchone()

        if row is None:
            return None
        value: str = row[0]
        return value

    def delete(self, key: str) -> None:
        """Remove a key. Used by tests to clean up after themselves."""
        with get_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = %s", (key,))
            conn.commit()
