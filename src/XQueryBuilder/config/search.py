"""Search domain configuration: URL settings and named query definitions."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from XQueryBuilder.config.common import (
    expect_bool,
    expect_choice,
    expect_choice_list,
    expect_non_negative_int,
    expect_str,
    expect_terms,
    get_optional_value,
    get_section,
)
from XQueryBuilder.core.models import NamedQuery
from XQueryBuilder.core.params import (
    EXCLUDE_TYPES,
    INCLUDE_TYPES,
    KEYWORD_MODES,
    LANGUAGES,
    MEDIA_TYPES,
    TIME_RANGES,
    QueryUpdate,
    apply_update,
    default_query_params,
)
from XQueryBuilder.data.presets import get_preset
from XQueryBuilder.query.parser import parse_query_string
from XQueryBuilder.query.url import SEARCH_TABS

_META_KEYS = {"NAME", "PRESET", "QUERY"}
_TERM_FIELDS = ("keywords", "any_keywords", "exclude_keywords", "custom_operators")
_TEXT_FIELDS = (
    "exact_phrase",
    "from_account",
    "to_account",
    "mention_account",
    "since_date",
    "until_date",
    "near_location",
    "within_distance",
)
_COUNT_FIELDS = ("min_faves", "min_retweets", "min_replies")
_CHOICE_FIELDS = {
    "keyword_mode": KEYWORD_MODES,
    "language": LANGUAGES,
    "time_range": TIME_RANGES,
}
_FLAG_FIELDS = {
    "media_type": MEDIA_TYPES,
    "include": INCLUDE_TYPES,
    "exclude": EXCLUDE_TYPES,
}
_ALLOWED_FIELDS = (
    set(_TERM_FIELDS) | set(_TEXT_FIELDS) | set(_COUNT_FIELDS) | set(_CHOICE_FIELDS) | set(_FLAG_FIELDS)
) | {"question_only"}


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated URL settings and configured queries."""

    domain: str
    tab: str
    queries: tuple[NamedQuery, ...]


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If keys or values are invalid.
    """
    section = get_section(raw, "search", required=False)

    queries_obj = raw.get("queries", [])
    if queries_obj is None:
        queries_obj = []
    if not isinstance(queries_obj, list):
        raise TypeError("queries must be a list")
    queries = tuple(parse_named_query(item, f"queries[{idx}]") for idx, item in enumerate(queries_obj))

    return SearchConfig(
        domain=expect_str(get_optional_value(section, "domain", "x.com"), "search.domain").strip().lower(),
        tab=expect_choice(get_optional_value(section, "tab", "live"), SEARCH_TABS, "search.tab"),
        queries=queries,
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if not config.domain:
        raise ValueError("search.domain must not be empty")
    if "/" in config.domain or " " in config.domain:
        raise ValueError(f"search.domain must be a bare host name, got: {config.domain}")
    names = [q.name for q in config.queries if q.name]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"queries NAME values must be unique, duplicated: {duplicates}")


def parse_named_query(value: Any, config_key: str) -> NamedQuery:
    """Parse one `queries` entry into a `NamedQuery`.

    Values are layered in this order: defaults, `PRESET`, parsed `QUERY`,
    then explicit fields.

    Args:
        value: Query mapping value.
        config_key: Full key path used in error messages.

    Returns:
        Named query with fully resolved parameters.

    Raises:
        TypeError: If query shape/types are invalid.
        ValueError: If keys or values are invalid.
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")

    unknown = {str(k) for k in value.keys()} - _META_KEYS - _ALLOWED_FIELDS
    if unknown:
        raise ValueError(f"{config_key} has unknown fields: {sorted(unknown)}")

    name = None
    if "NAME" in value:
        name = expect_str(value["NAME"], f"{config_key}.NAME").strip() or None

    params = default_query_params()
    if "PRESET" in value:
        preset_name = expect_str(value["PRESET"], f"{config_key}.PRESET")
        try:
            params = apply_update(params, get_preset(preset_name))
        except ValueError as e:
            raise ValueError(f"{config_key}.PRESET: {e}") from e
    if "QUERY" in value:
        parsed = parse_query_string(expect_str(value["QUERY"], f"{config_key}.QUERY"))
        params = apply_update(params, _mentioned_only(parsed))

    params = apply_update(params, _parse_fields(value, config_key))
    return NamedQuery(name=name, params=params)


def _mentioned_only(update: QueryUpdate) -> QueryUpdate:
    """Drop the empty list fields the parser always sets so a preset keeps them."""
    return replace(update, **{f.name: None for f in fields(update) if getattr(update, f.name) == ()})


def _parse_fields(value: Mapping[str, Any], config_key: str) -> QueryUpdate:
    """Build an update from the explicit field keys of a query entry."""
    values: dict[str, Any] = {}
    for key in _TERM_FIELDS:
        if key in value:
            values[key] = tuple(expect_terms(value[key], f"{config_key}.{key}"))
    for key in _TEXT_FIELDS:
        if key in value:
            values[key] = expect_str(value[key], f"{config_key}.{key}").strip()
    for key in _COUNT_FIELDS:
        if key in value:
            values[key] = expect_non_negative_int(value[key], f"{config_key}.{key}")
    for key, allowed in _CHOICE_FIELDS.items():
        if key in value:
            values[key] = expect_choice(value[key], allowed, f"{config_key}.{key}")
    for key, allowed in _FLAG_FIELDS.items():
        if key in value:
            values[key] = tuple(expect_choice_list(value[key], allowed, f"{config_key}.{key}"))
    if "question_only" in value:
        values["question_only"] = expect_bool(value["question_only"], f"{config_key}.question_only")
    return QueryUpdate(**values)
