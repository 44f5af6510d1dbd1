"""Preset filter combinations applied on top of the current parameters."""

from __future__ import annotations

from typing import Final

from XQueryBuilder.core.params import QueryUpdate

PRESETS: Final[dict[str, QueryUpdate]] = {
    # High-quality original posts.
    "quality": QueryUpdate(
        min_faves=300,
        exclude=("retweets", "replies", "links"),
        include=(),
    ),
    # Brand and customer feedback threads.
    "customer": QueryUpdate(
        include=("replies",),
        exclude=("links",),
        min_replies=3,
        question_only=False,
    ),
    # Shared resources and link roundups.
    "resource": QueryUpdate(
        media_type=("links",),
        min_faves=20,
        min_retweets=10,
        exclude=("retweets",),
    ),
    # Viral images.
    "visual": QueryUpdate(
        media_type=("images",),
        min_faves=100,
        exclude=("retweets",),
        include=(),
    ),
}


def get_preset(name: str) -> QueryUpdate:
    """Return a preset update by name.

    Raises:
        ValueError: If the preset is unknown.
    """
    key = (name or "").strip().lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset: {name} (expected one of {sorted(PRESETS)})")
    return PRESETS[key]
