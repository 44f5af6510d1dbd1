"""Console text output renderers.

Renders queries, parsed parameters and stored records into human-friendly
text. ConsoleOutputWriter sends the text through the package logger.
"""

from __future__ import annotations

from typing import Callable, Iterable

from XQueryBuilder.core.models import FavoriteQuery, SearchHistoryEntry, SearchTemplate
from XQueryBuilder.core.params import QueryParams, default_query_params
from XQueryBuilder.data.templates import REGION_LABELS
from XQueryBuilder.renderers.base import OutputWriter
from XQueryBuilder.renderers.json import params_to_dict
from XQueryBuilder.services.query import ComposedQuery
from XQueryBuilder.utils.log import log
from XQueryBuilder.utils.timefmt import format_relative_time


def _block(lines: list[str]) -> str:
    return "\n".join(lines).rstrip() + "\n"


def render_text(results: Iterable[ComposedQuery]) -> str:
    """Render composed queries into a text block."""
    lines: list[str] = []
    for idx, item in enumerate(results, start=1):
        lines.append(f"{idx}. {item.name or '(unnamed)'}")
        lines.append(f"   Query: {item.query or '-'}")
        if item.url:
            lines.append(f"   URL: {item.url}")
        elif item.query:
            lines.append("   URL: - (rejected by safety check)")
        lines.append("")
    return _block(lines)


def render_params(params: QueryParams) -> str:
    """Render only the fields that differ from the defaults."""
    defaults = params_to_dict(default_query_params())
    lines = [
        f"{key}: {value}"
        for key, value in params_to_dict(params).items()
        if value != defaults[key]
    ]
    if not lines:
        lines.append("(no filters)")
    return _block(lines)


def render_favorites(favorites: Iterable[FavoriteQuery], now: int | None = None) -> str:
    lines: list[str] = []
    for favorite in favorites:
        lines.append(f"[{favorite.id}] {favorite.name}  ({format_relative_time(favorite.updated_at, now)})")
        lines.append(f"   {favorite.query}")
    return _block(lines or ["No favorites yet"])


def render_history(entries: Iterable[SearchHistoryEntry], now: int | None = None) -> str:
    lines = [
        f"[{entry.id}] {format_relative_time(entry.timestamp, now)}  {entry.query}"
        for entry in entries
    ]
    return _block(lines or ["No search history yet"])


def render_templates(
    templates: Iterable[SearchTemplate],
    url_for: Callable[[str], str] | None = None,
) -> str:
    """Render templates, optionally followed by their search URLs."""
    lines: list[str] = []
    for template in templates:
        lines.append(f"{template.id}  {template.name}  [{REGION_LABELS.get(template.region, template.region)}]")
        lines.append(f"   {template.description}")
        lines.append(f"   {template.query}")
        if url_for is not None:
            lines.append(f"   URL: {url_for(template.query)}")
    return _block(lines or ["No templates"])


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(self, composed: ComposedQuery) -> None:
        for line in render_text([composed]).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
