"""Tests for the query composition service."""

from __future__ import annotations

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.config import parse_config_dict
from XQueryBuilder.core.params import QueryParams
from XQueryBuilder.services import create_query_service
from XQueryBuilder.services.query import QueryService


class TestQueryService(unittest.TestCase):
    def test_compose_sanitizes_and_builds_url(self) -> None:
        params = QueryParams(
            keywords=["<b>AI</b>", "ai", "ChatGPT"],
            keyword_mode="or",
            from_account=" @OpenAI ",
            exact_phrase="  hello \x01 world ",
        )
        before = deepcopy(params)

        composed = QueryService().compose(params, name="demo")

        self.assertEqual(composed.name, "demo")
        self.assertEqual(composed.query, '(AI OR ChatGPT) "hello world" from:OpenAI')
        self.assertTrue(composed.valid)
        self.assertTrue(composed.url.startswith("https://x.com/search?q=(AI%20OR%20ChatGPT)"))
        self.assertEqual(composed.params.keywords, ["AI", "ChatGPT"])
        self.assertEqual(params, before)

    def test_compose_rejects_unsafe_query(self) -> None:
        params = QueryParams(custom_operators=["javascript:alert(1)"])
        with self.assertLogs("XQueryBuilder", level="WARNING"):
            composed = QueryService().compose(params)
        self.assertFalse(composed.valid)
        self.assertIsNone(composed.url)

    def test_compose_empty_params(self) -> None:
        composed = QueryService().compose(QueryParams())
        self.assertEqual(composed.query, "")
        self.assertFalse(composed.valid)
        self.assertIsNone(composed.url)

    def test_reparse_and_normalize(self) -> None:
        service = QueryService()
        params = service.reparse("min_faves:10 AI lang:en")
        self.assertEqual(params.keywords, ["AI"])
        self.assertEqual(params.language, "en")
        self.assertEqual(service.normalize("min_faves:10 AI lang:en"), "AI lang:en min_faves:10")

    def test_factory_uses_search_settings(self) -> None:
        cfg = parse_config_dict({"search": {"domain": "twitter.com", "tab": "media"}})
        service = create_query_service(cfg)
        self.assertEqual(
            service.url_for("AI"),
            "https://twitter.com/search?q=AI&src=typed_query&f=media",
        )


if __name__ == "__main__":
    unittest.main()
