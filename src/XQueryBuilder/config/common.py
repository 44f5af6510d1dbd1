from __future__ import annotations

"""Shared helpers for configuration loading and validation.

Every helper reports the full dotted config key in its error message so a bad
YAML file points straight at the offending entry.
"""

from typing import Any, Mapping, Sequence


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return optional field value with default."""
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_non_negative_int(value: Any, config_key: str) -> int:
    """Validate an integer that must be zero or more."""
    number = expect_int(value, config_key)
    if number < 0:
        raise ValueError(f"{config_key} must be >= 0")
    return number


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
        out.append(item)
    return out


def expect_terms(value: Any, config_key: str) -> list[str]:
    """Accept a single string or a list of strings; blank items are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        term = value.strip()
        return [term] if term else []
    return [item.strip() for item in expect_str_list(value, config_key) if item.strip()]


def expect_choice(value: Any, allowed: Sequence[str], config_key: str) -> str:
    """Validate a string that must be one of `allowed` (case-insensitive)."""
    text = expect_str(value, config_key).strip().lower()
    if text not in allowed:
        raise ValueError(f"{config_key} must be one of {list(allowed)}, got: {value}")
    return text


def expect_choice_list(value: Any, allowed: Sequence[str], config_key: str) -> list[str]:
    """Validate a list whose items must all be in `allowed`; duplicates are dropped."""
    out: list[str] = []
    for idx, item in enumerate(expect_terms(value, config_key)):
        choice = expect_choice(item, allowed, f"{config_key}[{idx}]")
        if choice not in out:
            out.append(choice)
    return out
