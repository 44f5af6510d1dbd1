"""Tests for built-in presets and regional templates."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.core.params import apply_update, default_query_params
from XQueryBuilder.data.presets import PRESETS, get_preset
from XQueryBuilder.data.templates import (
    REGION_LABELS,
    REGIONS,
    all_templates,
    find_template,
    templates_for_region,
)
from XQueryBuilder.query.sanitize import is_valid_query_string
from XQueryBuilder.query.serializer import build_query_string
from XQueryBuilder.services.query import QueryService


class TestPresets(unittest.TestCase):
    def test_quality_preset_query(self) -> None:
        params = apply_update(default_query_params(), get_preset("quality"))
        self.assertEqual(build_query_string(params), "min_faves:300 -is:retweet -is:reply -filter:links")

    def test_lookup_is_case_insensitive(self) -> None:
        self.assertIs(get_preset(" Visual "), PRESETS["visual"])

    def test_unknown_preset(self) -> None:
        with self.assertRaises(ValueError):
            get_preset("nope")

    def test_preset_keeps_unrelated_fields(self) -> None:
        current = default_query_params()
        current.keywords = ["AI"]
        current.media_type = ["videos"]
        params = apply_update(current, get_preset("customer"))
        self.assertEqual(params.keywords, ["AI"])
        self.assertEqual(params.media_type, ["videos"])
        self.assertEqual(params.include, ["replies"])
        self.assertEqual(params.min_replies, 3)


class TestTemplates(unittest.TestCase):
    def test_every_region_has_templates_and_label(self) -> None:
        for region in REGIONS:
            self.assertTrue(templates_for_region(region))
            self.assertIn(region, REGION_LABELS)

    def test_ids_are_unique(self) -> None:
        ids = [template.id for template in all_templates()]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(len(ids), 18)

    def test_find_template(self) -> None:
        template = find_template("en-ai-top")
        self.assertIsNotNone(template)
        self.assertEqual(template.region, "en")
        self.assertIsNone(find_template("missing"))

    def test_unknown_region(self) -> None:
        with self.assertRaises(ValueError):
            templates_for_region("mars")

    def test_template_queries_are_valid_and_fully_recognized(self) -> None:
        service = QueryService()
        for template in all_templates():
            with self.subTest(template=template.id):
                self.assertTrue(is_valid_query_string(template.query))
                params = service.reparse(template.query)
                self.assertEqual(params.custom_operators, [])
                self.assertGreater(params.min_faves, 0)

    def test_template_normalization_is_stable(self) -> None:
        service = QueryService()
        for template in all_templates():
            with self.subTest(template=template.id):
                normalized = service.normalize(template.query)
                self.assertTrue(normalized)
                self.assertEqual(service.normalize(normalized), normalized)

    def test_or_template_normalizes_to_group(self) -> None:
        service = QueryService()
        self.assertEqual(
            service.normalize(find_template("en-ai-top").query),
            "(AI OR ChatGPT) lang:en within_time:12h min_faves:5000",
        )


if __name__ == "__main__":
    unittest.main()
