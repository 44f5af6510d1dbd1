"""Tests for console and JSON output writers."""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.config import parse_config_dict
from XQueryBuilder.core.models import FavoriteQuery, SearchHistoryEntry
from XQueryBuilder.core.params import QueryParams
from XQueryBuilder.renderers import (
    ConsoleOutputWriter,
    JsonFileWriter,
    MultiOutputWriter,
    create_output_writer,
    render_json,
    render_text,
)
from XQueryBuilder.renderers.console import render_favorites, render_history, render_params
from XQueryBuilder.services.query import QueryService

NOW = 1_700_000_000_000


class TestRenderers(unittest.TestCase):
    def setUp(self) -> None:
        self.composed = QueryService().compose(QueryParams(keywords=["AI"], min_faves=10), name="ai")

    def test_render_text(self) -> None:
        text = render_text([self.composed])
        self.assertIn("1. ai", text)
        self.assertIn("Query: AI min_faves:10", text)
        self.assertIn("URL: https://x.com/search?q=AI%20min_faves%3A10&src=typed_query&f=live", text)

    def test_render_json(self) -> None:
        (item,) = render_json([self.composed])
        self.assertEqual(item["name"], "ai")
        self.assertEqual(item["query"], "AI min_faves:10")
        self.assertTrue(item["valid"])
        self.assertEqual(item["params"]["min_faves"], 10)
        self.assertEqual(item["params"]["keywords"], ["AI"])

    def test_render_params_lists_changed_fields_only(self) -> None:
        text = render_params(QueryParams(language="ja"))
        self.assertEqual(text, "language: ja\n")
        self.assertEqual(render_params(QueryParams()), "(no filters)\n")

    def test_render_favorites_and_history(self) -> None:
        favorite = FavoriteQuery(id="f1", name="Daily", query="AI", created_at=NOW, updated_at=NOW - 60_000)
        entry = SearchHistoryEntry(id="h1", query="GPT", timestamp=NOW - 2 * 3_600_000)

        self.assertIn("[f1] Daily  (1m ago)", render_favorites([favorite], now=NOW))
        self.assertIn("[h1] 2h ago  GPT", render_history([entry], now=NOW))
        self.assertEqual(render_favorites([], now=NOW), "No favorites yet\n")
        self.assertEqual(render_history([], now=NOW), "No search history yet\n")

    def test_console_writer_logs_lines(self) -> None:
        with self.assertLogs("XQueryBuilder", level="INFO") as captured:
            ConsoleOutputWriter().write_query_result(self.composed)
        self.assertTrue(any("Query: AI min_faves:10" in line for line in captured.output))

    def test_json_writer_writes_file_on_finalize(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            writer = JsonFileWriter(tmp)
            writer.write_query_result(self.composed)
            writer.finalize("build")

            self.assertIsNotNone(writer.output_path)
            self.assertEqual(writer.output_path.parent, Path(tmp) / "json")
            self.assertTrue(writer.output_path.name.startswith("build_"))
            data = json.loads(writer.output_path.read_text(encoding="utf-8"))

        self.assertEqual(data[0]["query"], "AI min_faves:10")

    def test_factory_builds_configured_writers(self) -> None:
        cfg = parse_config_dict({"output": {"base_dir": "out", "formats": ["console", "json"]}})
        writer = create_output_writer(cfg)
        self.assertIsInstance(writer, MultiOutputWriter)
        self.assertEqual(
            [type(w) for w in writer.writers],
            [ConsoleOutputWriter, JsonFileWriter],
        )


if __name__ == "__main__":
    unittest.main()
