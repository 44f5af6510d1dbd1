"""Tests for sparse parameter updates."""

from __future__ import annotations

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.core.params import (
    MAX_COUNT,
    QueryParams,
    QueryUpdate,
    apply_update,
    clean_account,
    coerce_count,
    default_query_params,
)


class TestApplyUpdate(unittest.TestCase):
    def test_empty_update_copies_everything(self) -> None:
        current = QueryParams(keywords=["AI"], language="en", min_faves=3, exclude=["links"])
        merged = apply_update(current, QueryUpdate())
        self.assertEqual(merged, current)
        self.assertIsNot(merged, current)
        self.assertIsNot(merged.keywords, current.keywords)
        self.assertIsNot(merged.exclude, current.exclude)

    def test_current_is_not_mutated(self) -> None:
        current = QueryParams(keywords=["AI"], media_type=["images"])
        before = deepcopy(current)
        apply_update(current, QueryUpdate(keywords=("GPT",), media_type=("links",), min_faves=9))
        self.assertEqual(current, before)

    def test_lists_replaced_and_deduplicated(self) -> None:
        merged = apply_update(QueryParams(keywords=["old"]), QueryUpdate(keywords=("a", "b", "a")))
        self.assertEqual(merged.keywords, ["a", "b"])

    def test_unsupported_enum_values_ignored(self) -> None:
        current = QueryParams(keyword_mode="or", language="ja", time_range="4h")
        merged = apply_update(current, QueryUpdate(keyword_mode="xor", language="klingon", time_range="5y"))
        self.assertEqual((merged.keyword_mode, merged.language, merged.time_range), ("or", "ja", "4h"))

    def test_flag_fields_keep_only_allowed_values(self) -> None:
        merged = apply_update(
            default_query_params(),
            QueryUpdate(media_type=("images", "gifs"), include=("verified", "bogus"), exclude=("links",)),
        )
        self.assertEqual(merged.media_type, ["images"])
        self.assertEqual(merged.include, ["verified"])
        self.assertEqual(merged.exclude, ["links"])

    def test_counts_are_coerced(self) -> None:
        merged = apply_update(default_query_params(), QueryUpdate(min_faves="12", min_retweets="abc", min_replies=-4))
        self.assertEqual((merged.min_faves, merged.min_retweets, merged.min_replies), (12, 0, 0))

    def test_question_only_can_be_cleared(self) -> None:
        merged = apply_update(QueryParams(question_only=True), QueryUpdate(question_only=False))
        self.assertFalse(merged.question_only)

    def test_default_records_are_independent(self) -> None:
        first = default_query_params()
        first.keywords.append("AI")
        self.assertEqual(default_query_params().keywords, [])


class TestHelpers(unittest.TestCase):
    def test_coerce_count(self) -> None:
        self.assertEqual(coerce_count(3.7), 3)
        self.assertEqual(coerce_count(" 8 "), 8)
        self.assertEqual(coerce_count(True), 0)
        self.assertEqual(coerce_count(float("nan")), 0)
        self.assertEqual(coerce_count(None), 0)

    def test_coerce_count_clamps_huge_values(self) -> None:
        self.assertEqual(coerce_count(10**5000), MAX_COUNT)
        self.assertEqual(coerce_count(1e300), MAX_COUNT)
        self.assertEqual(coerce_count("9" * 30), MAX_COUNT)
        self.assertEqual(coerce_count(float("-inf")), 0)

    def test_clean_account(self) -> None:
        self.assertEqual(clean_account("  @@bob "), "bob")
        self.assertEqual(clean_account(None), "")


if __name__ == "__main__":
    unittest.main()
