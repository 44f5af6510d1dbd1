"""Storage layer for XQueryBuilder.

Provides the key-value backends and the favorites and history stores built
on top of them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from XQueryBuilder.storage.db import DatabaseManager
from XQueryBuilder.storage.favorites import FAVORITES_KEY, FavoritesStore
from XQueryBuilder.storage.history import HISTORY_KEY, SearchHistoryStore
from XQueryBuilder.storage.kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from XQueryBuilder.utils.log import log

if TYPE_CHECKING:
    from XQueryBuilder.config import AppConfig


def create_storage(
    config: AppConfig,
) -> tuple[DatabaseManager | None, FavoritesStore | None, SearchHistoryStore | None]:
    """Create database manager and stores.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, favorites_store, history_store).
        All three are None when storage is disabled.
    """
    if not config.storage.enabled:
        return None, None, None

    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    kv = SqliteKeyValueStore(db_manager)
    log.debug("Storage enabled: %s", db_path)
    return (
        db_manager,
        FavoritesStore(kv),
        SearchHistoryStore(kv, limit=config.storage.history_limit),
    )


__all__ = [
    "DatabaseManager",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    "FavoritesStore",
    "SearchHistoryStore",
    "FAVORITES_KEY",
    "HISTORY_KEY",
    "create_storage",
]
