"""Command implementations for XQueryBuilder CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling. Every command receives its collaborators through `CommandContext`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol

import click

from XQueryBuilder.config import AppConfig
from XQueryBuilder.data.templates import all_templates, templates_for_region
from XQueryBuilder.query.sanitize import is_valid_query_string
from XQueryBuilder.query.serializer import build_query_string
from XQueryBuilder.renderers import OutputWriter
from XQueryBuilder.renderers.console import (
    render_favorites,
    render_history,
    render_params,
    render_templates,
)
from XQueryBuilder.renderers.json import params_to_dict
from XQueryBuilder.services.query import QueryService
from XQueryBuilder.storage import FavoritesStore, SearchHistoryStore
from XQueryBuilder.utils.log import log


@dataclass(slots=True)
class CommandContext:
    """Collaborators shared by all commands."""

    config: AppConfig
    service: QueryService
    favorites: FavoritesStore | None = None
    history: SearchHistoryStore | None = None

    def require_favorites(self) -> FavoritesStore:
        if self.favorites is None:
            raise ValueError("Favorites need storage.enabled=true")
        return self.favorites

    def require_history(self) -> SearchHistoryStore:
        if self.history is None:
            raise ValueError("Search history needs storage.enabled=true")
        return self.history


class Command(Protocol):
    def execute(self, ctx: CommandContext) -> None:
        ...


def _log_block(text: str) -> None:
    for line in text.splitlines():
        log.info(line)


def _checked_query(query: str) -> str:
    text = (query or "").strip()
    if not is_valid_query_string(text):
        raise ValueError("Query is empty or contains unsafe content")
    return text


@dataclass(slots=True)
class BuildCommand:
    """Compose every configured query and hand results to the output writer.

    Valid queries are also recorded in the search history when storage is
    enabled.
    """

    output_writer: OutputWriter
    action: str = "build"

    def execute(self, ctx: CommandContext) -> None:
        queries = ctx.config.search.queries
        if not queries:
            log.warning("No queries configured")
        for idx, named in enumerate(queries, start=1):
            log.debug("Building query %d/%d name=%s", idx, len(queries), named.name)
            composed = ctx.service.compose(named.params, name=named.name)
            self.output_writer.write_query_result(composed)
            if composed.url and ctx.history is not None:
                ctx.history.record(composed.query)
        log.info("Built %d queries", len(queries))
        self.output_writer.finalize(self.action)


@dataclass(slots=True)
class ParseCommand:
    """Parse a query string and show its fields plus the normalized form."""

    query: str
    as_json: bool = False

    def execute(self, ctx: CommandContext) -> None:
        params = ctx.service.reparse(self.query)
        normalized = build_query_string(params)
        if self.as_json:
            payload = {
                "query": normalized,
                "valid": is_valid_query_string(normalized),
                "params": params_to_dict(params),
            }
            click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        _log_block(render_params(params))
        log.info("Normalized: %s", normalized or "-")


@dataclass(slots=True)
class UrlCommand:
    query: str

    def execute(self, ctx: CommandContext) -> None:
        click.echo(ctx.service.url_for(_checked_query(self.query)))


@dataclass(slots=True)
class OpenCommand:
    """Record the query in history and open its search page in the browser."""

    query: str

    def execute(self, ctx: CommandContext) -> None:
        text = _checked_query(self.query)
        url = ctx.service.url_for(text)
        if ctx.history is not None:
            ctx.history.record(text)
        log.info("Opening %s", url)
        click.launch(url)


@dataclass(slots=True)
class TemplatesCommand:
    region: str | None = None

    def execute(self, ctx: CommandContext) -> None:
        templates = templates_for_region(self.region) if self.region else all_templates()
        _log_block(render_templates(templates, url_for=ctx.service.url_for))


@dataclass(slots=True)
class FavoritesListCommand:
    def execute(self, ctx: CommandContext) -> None:
        _log_block(render_favorites(ctx.require_favorites().list()))


@dataclass(slots=True)
class FavoritesAddCommand:
    name: str
    query: str

    def execute(self, ctx: CommandContext) -> None:
        favorite = ctx.require_favorites().add(self.name, self.query)
        log.info("Saved favorite [%s] %s", favorite.id, favorite.name)


@dataclass(slots=True)
class FavoritesRenameCommand:
    favorite_id: str
    name: str

    def execute(self, ctx: CommandContext) -> None:
        store = ctx.require_favorites()
        existing = store.get(self.favorite_id)
        if existing is None:
            raise KeyError(f"Unknown favorite id: {self.favorite_id}")
        favorite = store.update(existing.id, self.name, existing.query)
        log.info("Renamed favorite [%s] to %s", favorite.id, favorite.name)


@dataclass(slots=True)
class FavoritesRemoveCommand:
    favorite_id: str

    def execute(self, ctx: CommandContext) -> None:
        if not ctx.require_favorites().remove(self.favorite_id):
            raise KeyError(f"Unknown favorite id: {self.favorite_id}")
        log.info("Removed favorite [%s]", self.favorite_id)


@dataclass(slots=True)
class HistoryListCommand:
    def execute(self, ctx: CommandContext) -> None:
        _log_block(render_history(ctx.require_history().list()))


@dataclass(slots=True)
class HistoryRemoveCommand:
    entry_id: str

    def execute(self, ctx: CommandContext) -> None:
        if not ctx.require_history().remove(self.entry_id):
            raise KeyError(f"Unknown history id: {self.entry_id}")
        log.info("Removed history entry [%s]", self.entry_id)


@dataclass(slots=True)
class HistoryClearCommand:
    def execute(self, ctx: CommandContext) -> None:
        count = ctx.require_history().clear()
        log.info("Cleared %d history entries", count)
