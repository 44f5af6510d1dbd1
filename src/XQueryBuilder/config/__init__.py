from __future__ import annotations

"""Public configuration API for XQueryBuilder."""

from XQueryBuilder.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from XQueryBuilder.config.output import OutputConfig
from XQueryBuilder.config.runtime import RuntimeConfig
from XQueryBuilder.config.search import SearchConfig, parse_named_query
from XQueryBuilder.config.storage import StorageConfig

__all__ = [
    "RuntimeConfig",
    "SearchConfig",
    "StorageConfig",
    "OutputConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
    "parse_named_query",
]
