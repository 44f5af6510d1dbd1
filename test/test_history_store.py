"""Tests for search history persistence."""

from __future__ import annotations

import itertools
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.storage.db import DatabaseManager
from XQueryBuilder.storage.history import HISTORY_KEY, SearchHistoryStore
from XQueryBuilder.storage.kv import MemoryKeyValueStore, SqliteKeyValueStore


def _clock():
    counter = itertools.count(1_700_000_000_000, 1000)
    return lambda: next(counter)


class TestSearchHistoryStore(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = MemoryKeyValueStore()
        self.store = SearchHistoryStore(self.kv, limit=3, clock=_clock())

    def test_newest_first(self) -> None:
        self.store.record("AI")
        self.store.record("GPT")
        self.assertEqual([e.query for e in self.store.list()], ["GPT", "AI"])

    def test_repeated_query_moves_to_front(self) -> None:
        first = self.store.record("AI")
        self.store.record("GPT")
        again = self.store.record("  AI ")

        entries = self.store.list()
        self.assertEqual([e.query for e in entries], ["AI", "GPT"])
        self.assertGreater(again.timestamp, first.timestamp)

    def test_limit_drops_oldest(self) -> None:
        for query in ("one", "two", "three", "four"):
            self.store.record(query)
        self.assertEqual([e.query for e in self.store.list()], ["four", "three", "two"])

    def test_invalid_queries_not_recorded(self) -> None:
        with self.assertLogs("XQueryBuilder", level="WARNING"):
            self.assertIsNone(self.store.record(""))
            self.assertIsNone(self.store.record("javascript:alert(1)"))
            self.assertIsNone(self.store.record(None))
        self.assertEqual(self.store.list(), [])

    def test_remove_and_clear(self) -> None:
        entry = self.store.record("AI")
        self.store.record("GPT")

        self.assertFalse(self.store.remove("missing"))
        self.assertTrue(self.store.remove(entry.id))
        self.assertEqual([e.query for e in self.store.list()], ["GPT"])
        self.assertEqual(self.store.clear(), 1)
        self.assertEqual(self.store.list(), [])

    def test_corrupt_rows_are_skipped(self) -> None:
        entry = self.store.record("AI")
        self.kv.set(HISTORY_KEY, [entry.to_dict(), {"id": "x", "query": "q", "timestamp": "soon"}])
        with self.assertLogs("XQueryBuilder", level="WARNING"):
            self.assertEqual(self.store.list(), [entry])

    def test_limit_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            SearchHistoryStore(self.kv, limit=0)


class TestHistorySqlite(unittest.TestCase):
    def test_history_persists(self) -> None:
        tmp_db = Path(tempfile.mkdtemp()) / "xquery.db"

        with DatabaseManager(tmp_db) as manager:
            store = SearchHistoryStore(SqliteKeyValueStore(manager))
            store.record("AI")
            store.record("GPT")

        with DatabaseManager(tmp_db) as manager:
            entries = SearchHistoryStore(SqliteKeyValueStore(manager)).list()

        self.assertEqual([e.query for e in entries], ["GPT", "AI"])


if __name__ == "__main__":
    unittest.main()
