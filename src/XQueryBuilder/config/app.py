from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints.

Every section has a loader and a checker; `parse_config_dict` runs all
loaders first so type errors surface before constraint errors. When the
default config file is absent (e.g. an installed `xquery` run outside the
repository) the built-in section defaults are used.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from XQueryBuilder.config.output import OutputConfig, check_output, load_output
from XQueryBuilder.config.runtime import RuntimeConfig, check_runtime, load_runtime
from XQueryBuilder.config.search import SearchConfig, check_search, load_search
from XQueryBuilder.config.storage import StorageConfig, check_storage, load_storage

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration.

    Attributes:
        runtime: Logging settings from the `log` section.
        search: URL settings and the configured named queries.
        output: Writers used by the build command.
        storage: Favorites and history persistence.
    """

    runtime: RuntimeConfig
    search: SearchConfig
    output: OutputConfig
    storage: StorageConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a value is missing or violates a constraint.
    """
    config = AppConfig(
        runtime=load_runtime(raw),
        search=load_search(raw),
        output=load_output(raw),
        storage=load_storage(raw),
    )
    check_runtime(config.runtime)
    check_search(config.search)
    check_output(config.output)
    check_storage(config.storage)
    return config


def read_config_file(path: Path, *, missing_ok: bool = False) -> dict[str, Any]:
    """Read one YAML config file into a mapping.

    Args:
        path: YAML file path.
        missing_ok: Return an empty mapping instead of raising when the file
            does not exist.

    Raises:
        FileNotFoundError: If the file is missing and `missing_ok` is False.
        ValueError: If the YAML root is not a mapping.
    """
    if missing_ok and not path.exists():
        return {}
    return parse_yaml(path.read_text(encoding="utf-8"))


def load_config(path: Path) -> AppConfig:
    """Load one YAML config file without default merge.

    A missing file is only tolerated for `DEFAULT_CONFIG_PATH`.
    """
    return parse_config_dict(read_config_file(path, missing_ok=path == DEFAULT_CONFIG_PATH))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by deep-merging `config_path` over `default_path`."""
    base = read_config_file(default_path, missing_ok=default_path == DEFAULT_CONFIG_PATH)
    if config_path == default_path:
        return parse_config_dict(base)
    return parse_config_dict(merge_config_dicts(base, read_config_file(config_path)))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping; an empty document gives `{}`."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings.

    Nested mappings merge key by key; any other value in `override`,
    including the `queries` list, replaces the base value.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(current, value)
        else:
            merged[key] = value
    return merged
