"""Output domain configuration for built query results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from XQueryBuilder.config.common import (
    expect_choice_list,
    expect_str,
    get_optional_value,
    get_section,
)

_ALLOWED_FORMATS = ("console", "json")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a format is unknown.
    """
    section = get_section(raw, "output", required=False)
    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", "output"), "output.base_dir"),
        formats=tuple(
            expect_choice_list(get_optional_value(section, "formats", ["console"]), _ALLOWED_FORMATS, "output.formats")
        ),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints."""
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    if "json" in config.formats and not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty when json output is enabled")
