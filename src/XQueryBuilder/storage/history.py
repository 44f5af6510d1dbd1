"""Search history persistence."""

from __future__ import annotations

import uuid
from typing import Any, Callable

from XQueryBuilder.core.models import SearchHistoryEntry
from XQueryBuilder.query.sanitize import is_valid_query_string
from XQueryBuilder.storage.kv import KeyValueStore
from XQueryBuilder.utils.log import log
from XQueryBuilder.utils.timefmt import now_ms

HISTORY_KEY = "x-query-history"
DEFAULT_HISTORY_LIMIT = 50


class SearchHistoryStore:
    """Most-recent-first list of executed queries stored under `HISTORY_KEY`."""

    def __init__(
        self,
        kv: KeyValueStore,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the store.

        Args:
            kv: Storage backend.
            limit: Maximum number of entries kept; older ones are dropped.
            clock: Returns the current time in epoch milliseconds.
        """
        if limit <= 0:
            raise ValueError("History limit must be positive")
        self.kv = kv
        self.limit = limit
        self.clock = clock

    def list(self) -> list[SearchHistoryEntry]:
        """Return entries, newest first."""
        raw = self.kv.get(HISTORY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            log.warning("Ignoring search history: stored value is not a list")
            return []
        out: list[SearchHistoryEntry] = []
        for item in raw:
            try:
                out.append(SearchHistoryEntry.from_dict(item))
            except ValueError as e:
                log.warning("Skipping corrupt history record: %s", e)
        return out

    def record(self, query: Any) -> SearchHistoryEntry | None:
        """Add a query to the top of the history.

        A query already in the history moves to the top with a fresh
        timestamp instead of being duplicated.

        Args:
            query: Query string that was executed.

        Returns:
            The new entry, or None when the query is blank or unsafe.
        """
        text = query.strip() if isinstance(query, str) else ""
        if not is_valid_query_string(text):
            log.warning("Not recording unsafe or empty query in history")
            return None

        entry = SearchHistoryEntry(id=uuid.uuid4().hex, query=text, timestamp=self.clock())
        entries = [entry] + [e for e in self.list() if e.query != text]
        self._save(entries[: self.limit])
        log.debug("History recorded: %s", text)
        return entry

    def remove(self, entry_id: str) -> bool:
        """Delete one entry. Returns False when the id is unknown."""
        entries = self.list()
        kept = [e for e in entries if e.id != entry_id]
        if len(kept) == len(entries):
            return False
        self._save(kept)
        return True

    def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        count = len(self.list())
        self._save([])
        log.debug("History cleared: %d entries", count)
        return count

    def _save(self, entries: list[SearchHistoryEntry]) -> None:
        self.kv.set(HISTORY_KEY, [e.to_dict() for e in entries])
