"""Favorite query persistence."""

from __future__ import annotations

import uuid
from typing import Any, Callable

from XQueryBuilder.core.models import FavoriteQuery
from XQueryBuilder.query.sanitize import is_valid_query_string, sanitize_name
from XQueryBuilder.storage.kv import KeyValueStore
from XQueryBuilder.utils.log import log
from XQueryBuilder.utils.timefmt import now_ms

FAVORITES_KEY = "x-query-favorites"


class FavoritesStore:
    """Named queries stored as one list under `FAVORITES_KEY`.

    Names are sanitized before saving; a name that sanitizes to nothing or a
    query that fails `is_valid_query_string` is refused with `ValueError`.
    """

    def __init__(self, kv: KeyValueStore, clock: Callable[[], int] = now_ms) -> None:
        """Initialize the store.

        Args:
            kv: Storage backend.
            clock: Returns the current time in epoch milliseconds.
        """
        self.kv = kv
        self.clock = clock

    def list(self) -> list[FavoriteQuery]:
        """Return favorites in insertion order, skipping corrupt rows."""
        return _load_records(self.kv.get(FAVORITES_KEY))

    def get(self, favorite_id: str) -> FavoriteQuery | None:
        for favorite in self.list():
            if favorite.id == favorite_id:
                return favorite
        return None

    def add(self, name: Any, query: Any) -> FavoriteQuery:
        """Save a new favorite.

        Args:
            name: Display name; sanitized with `sanitize_name`.
            query: Query string to save.

        Returns:
            The saved favorite.

        Raises:
            ValueError: If the name or query is rejected.
        """
        clean_name, clean_query = _check_input(name, query)
        now = self.clock()
        favorite = FavoriteQuery(
            id=uuid.uuid4().hex,
            name=clean_name,
            query=clean_query,
            created_at=now,
            updated_at=now,
        )
        favorites = self.list()
        favorites.append(favorite)
        self._save(favorites)
        log.debug("Favorite added: id=%s name=%s", favorite.id, favorite.name)
        return favorite

    def update(self, favorite_id: str, name: Any, query: Any) -> FavoriteQuery:
        """Replace the name and query of an existing favorite.

        Raises:
            KeyError: If no favorite has this id.
            ValueError: If the name or query is rejected.
        """
        clean_name, clean_query = _check_input(name, query)
        favorites = self.list()
        for idx, favorite in enumerate(favorites):
            if favorite.id == favorite_id:
                updated = FavoriteQuery(
                    id=favorite.id,
                    name=clean_name,
                    query=clean_query,
                    created_at=favorite.created_at,
                    updated_at=self.clock(),
                )
                favorites[idx] = updated
                self._save(favorites)
                log.debug("Favorite updated: id=%s", favorite_id)
                return updated
        raise KeyError(favorite_id)

    def remove(self, favorite_id: str) -> bool:
        """Delete a favorite. Returns False when the id is unknown."""
        favorites = self.list()
        kept = [f for f in favorites if f.id != favorite_id]
        if len(kept) == len(favorites):
            return False
        self._save(kept)
        log.debug("Favorite removed: id=%s", favorite_id)
        return True

    def _save(self, favorites: list[FavoriteQuery]) -> None:
        self.kv.set(FAVORITES_KEY, [f.to_dict() for f in favorites])


def _check_input(name: Any, query: Any) -> tuple[str, str]:
    clean_name = sanitize_name(name)
    if clean_name is None:
        raise ValueError("Favorite name is empty or invalid")
    clean_query = query.strip() if isinstance(query, str) else ""
    if not is_valid_query_string(clean_query):
        raise ValueError("Favorite query is empty or contains unsafe content")
    return clean_name, clean_query


def _load_records(raw: Any) -> list[FavoriteQuery]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        log.warning("Ignoring favorites: stored value is not a list")
        return []
    out: list[FavoriteQuery] = []
    for item in raw:
        try:
            out.append(FavoriteQuery.from_dict(item))
        except ValueError as e:
            log.warning("Skipping corrupt favorite record: %s", e)
    return out
