"""JSON output renderers.

Converts composed queries and parameter records into JSON-serializable
objects and provides JsonFileWriter for the build command.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from XQueryBuilder.core.params import QueryParams
from XQueryBuilder.renderers.base import OutputWriter
from XQueryBuilder.services.query import ComposedQuery
from XQueryBuilder.utils.log import log


def params_to_dict(params: QueryParams) -> dict[str, Any]:
    """Convert a parameter record into a plain dict, lists copied."""
    return {
        "keywords": list(params.keywords),
        "keyword_mode": params.keyword_mode,
        "any_keywords": list(params.any_keywords),
        "exclude_keywords": list(params.exclude_keywords),
        "exact_phrase": params.exact_phrase,
        "from_account": params.from_account,
        "to_account": params.to_account,
        "mention_account": params.mention_account,
        "since_date": params.since_date,
        "until_date": params.until_date,
        "near_location": params.near_location,
        "within_distance": params.within_distance,
        "language": params.language,
        "time_range": params.time_range,
        "min_faves": params.min_faves,
        "min_retweets": params.min_retweets,
        "min_replies": params.min_replies,
        "media_type": list(params.media_type),
        "include": list(params.include),
        "exclude": list(params.exclude),
        "question_only": params.question_only,
        "custom_operators": list(params.custom_operators),
    }


def render_json(results: Iterable[ComposedQuery]) -> list[dict[str, Any]]:
    """Render composed queries into JSON-serializable objects."""
    return [
        {
            "name": item.name,
            "query": item.query,
            "url": item.url,
            "valid": item.valid,
            "params": params_to_dict(item.params),
        }
        for item in results
    ]


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.results: list[ComposedQuery] = []
        self.output_path: Path | None = None

    def write_query_result(self, composed: ComposedQuery) -> None:
        self.results.append(composed)

    def finalize(self, action: str) -> None:
        """Write accumulated results to `<base_dir>/json/<action>_<timestamp>.json`."""
        payload = json.dumps(render_json(self.results), ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_path = self.output_dir / f"{action}_{timestamp}.json"
        self.output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", self.output_path)
