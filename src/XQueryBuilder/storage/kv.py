"""Key-value storage backends for persisted query records."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from XQueryBuilder.storage.db import DatabaseManager


class KeyValueStore(Protocol):
    """Minimal storage contract used by favorites and history.

    Values are JSON-compatible objects. Writes replace the previous value
    (last writer wins).
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        """Store a value under a key."""
        raise NotImplementedError


class MemoryKeyValueStore:
    """In-process store; values are copied through JSON on every access."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)


class SqliteKeyValueStore:
    """Key-value store persisted in the `kv_store` table."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        """Initialize the store.

        Args:
            db_manager: Database manager providing the shared connection.
        """
        self.conn = db_manager.get_connection()

    def get(self, key: str) -> Any | None:
        """Return the decoded value for `key`, or None when absent.

        Raises:
            json.JSONDecodeError: If the stored text is not valid JSON.
        """
        row = self.conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    def set(self, key: str, value: Any) -> None:
        """Encode and upsert `value` under `key`."""
        payload = json.dumps(value, ensure_ascii=False)
        with self.conn:
            self.conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CAST(strftime('%s','now') AS INTEGER))
                ON CONFLICT(key) DO UPDATE SET
                  value = excluded.value,
                  updated_at = excluded.updated_at
                """,
                (key, payload),
            )
