"""Tests for keyword, name and query string sanitizing."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.query.sanitize import (
    MAX_KEYWORD_LENGTH,
    MAX_NAME_LENGTH,
    is_valid_query_string,
    sanitize_keyword,
    sanitize_keywords,
    sanitize_name,
)


class TestSanitizeKeyword(unittest.TestCase):
    def test_strips_tags_controls_and_whitespace(self) -> None:
        self.assertEqual(sanitize_keyword("  <i>hello</i>\x00   world\t"), "hello world")

    def test_keeps_quotes_and_operator_characters(self) -> None:
        self.assertEqual(sanitize_keyword('"AI" -spam #tag'), '"AI" -spam #tag')

    def test_truncates(self) -> None:
        self.assertEqual(len(sanitize_keyword("a" * 300)), MAX_KEYWORD_LENGTH)

    def test_non_string_is_empty(self) -> None:
        self.assertEqual(sanitize_keyword(None), "")
        self.assertEqual(sanitize_keyword(123), "")


class TestSanitizeName(unittest.TestCase):
    def test_tags_removed_and_whitespace_collapsed(self) -> None:
        self.assertEqual(sanitize_name("<b>Hi</b>  there"), "Hi there")

    def test_empty_and_none_rejected(self) -> None:
        self.assertIsNone(sanitize_name(""))
        self.assertIsNone(sanitize_name(None))
        self.assertIsNone(sanitize_name("   "))
        self.assertIsNone(sanitize_name("<script></script>"))

    def test_unsafe_characters_removed(self) -> None:
        self.assertEqual(sanitize_name("a{b}\\c"), "abc")

    def test_truncates(self) -> None:
        self.assertEqual(len(sanitize_name("x" * 150)), MAX_NAME_LENGTH)


class TestIsValidQueryString(unittest.TestCase):
    def test_accepts_search_syntax(self) -> None:
        self.assertTrue(is_valid_query_string("AI min_faves:100"))
        self.assertTrue(is_valid_query_string('(AI OR ChatGPT) -is:retweet "exact"'))

    def test_rejects_injection(self) -> None:
        for query in (
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            "data:text/html,hi",
            "vbscript:msgbox",
            "<SCRIPT>alert(1)</SCRIPT>",
            "img onerror = x",
        ):
            self.assertFalse(is_valid_query_string(query), query)

    def test_rejects_empty_and_non_string(self) -> None:
        self.assertFalse(is_valid_query_string(""))
        self.assertFalse(is_valid_query_string(None))


class TestSanitizeKeywords(unittest.TestCase):
    def test_dedup_is_case_insensitive_and_keeps_first(self) -> None:
        self.assertEqual(
            sanitize_keywords(["AI", "ai", " ChatGPT ", "", None, "chatgpt"]),
            ["AI", "ChatGPT"],
        )

    def test_non_sequence_input(self) -> None:
        self.assertEqual(sanitize_keywords(None), [])
        self.assertEqual(sanitize_keywords("AI"), [])
        self.assertEqual(sanitize_keywords(5), [])


if __name__ == "__main__":
    unittest.main()
