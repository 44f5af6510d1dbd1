from __future__ import annotations

"""Storage domain configuration for favorites and search history."""

import os
from dataclasses import dataclass
from typing import Any, Mapping

from XQueryBuilder.config.common import (
    expect_bool,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)
from XQueryBuilder.storage.history import DEFAULT_HISTORY_LIMIT


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage configuration.

    Attributes:
        enabled: Whether favorites and history are persisted.
        db_path: Effective SQLite path after the environment override.
        db_path_env: Environment variable that overrides `db_path` when set.
        history_limit: Maximum number of history entries kept.
    """

    enabled: bool
    db_path: str
    db_path_env: str
    history_limit: int


def load_storage(raw: Mapping[str, Any]) -> StorageConfig:
    """Load storage domain config from raw mapping."""
    section = get_section(raw, "storage", required=False)
    db_path_env = expect_str(get_optional_value(section, "db_path_env", "XQUERY_DB_PATH"), "storage.db_path_env")
    db_path = expect_str(get_optional_value(section, "db_path", "database/xquery.db"), "storage.db_path")
    return StorageConfig(
        enabled=expect_bool(get_optional_value(section, "enabled", True), "storage.enabled"),
        db_path=_load_db_path_from_env(db_path_env) or db_path,
        db_path_env=db_path_env,
        history_limit=expect_int(
            get_optional_value(section, "history_limit", DEFAULT_HISTORY_LIMIT),
            "storage.history_limit",
        ),
    )


def check_storage(config: StorageConfig) -> None:
    """Validate storage domain constraints."""
    if config.enabled and not config.db_path.strip():
        raise ValueError("storage.db_path must not be empty")
    if config.history_limit <= 0:
        raise ValueError("storage.history_limit must be positive")


def _load_db_path_from_env(db_path_env: str) -> str:
    """Read the database path override from the environment."""
    if not db_path_env.strip():
        return ""
    return os.getenv(db_path_env, "").strip()
