"""Structured search parameters for X advanced search.

`QueryParams` is the editable record behind a query string. `QueryUpdate` is
its sparse counterpart: every field is optional and `None` means "keep the
current value". Updates come from presets, config files and the query parser
and are merged with `apply_update`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Final, Iterable, Sequence

KEYWORD_MODES: Final[tuple[str, ...]] = ("and", "or")

LANGUAGES: Final[tuple[str, ...]] = (
    "all",
    "zh",
    "zh-cn",
    "en",
    "ja",
    "ko",
    "es",
    "fr",
    "de",
    "ru",
    "th",
    "ar",
    "hi",
)

TIME_RANGES: Final[tuple[str, ...]] = ("all", "1h", "4h", "12h", "24h", "2d", "7d", "30d")

# Canonical emission order for the flag-like fields.
MEDIA_TYPES: Final[tuple[str, ...]] = ("images", "videos", "links")
INCLUDE_TYPES: Final[tuple[str, ...]] = ("replies", "verified", "spaces")
EXCLUDE_TYPES: Final[tuple[str, ...]] = ("retweets", "replies", "links")

# Largest engagement threshold kept; bigger values are clamped to it.
MAX_COUNT: Final[int] = 999_999_999_999_999_999


@dataclass(slots=True)
class QueryParams:
    """Full, mutable set of search filters.

    Attributes:
        keywords: Required terms, joined according to `keyword_mode`.
        keyword_mode: "and" joins with spaces, "or" builds a parenthesized group.
        any_keywords: Optional OR-group, always parenthesized.
        exclude_keywords: Terms emitted as `-term`.
        exact_phrase: Phrase emitted as one double-quoted token.
        from_account: Author handle (`from:`).
        to_account: Reply target handle (`to:`).
        mention_account: Mentioned handle (`@handle`).
        since_date: Lower date bound, emitted verbatim.
        until_date: Upper date bound, emitted verbatim.
        near_location: Geo filter location.
        within_distance: Geo filter radius, e.g. "10km".
        language: Language code or "all".
        time_range: Relative time window or "all".
        min_faves: Minimum likes, 0 disables.
        min_retweets: Minimum reposts, 0 disables.
        min_replies: Minimum replies, 0 disables.
        media_type: Subset of `MEDIA_TYPES`.
        include: Subset of `INCLUDE_TYPES`.
        exclude: Subset of `EXCLUDE_TYPES`.
        question_only: Emit the `?` operator.
        custom_operators: Free-form tokens appended verbatim.
    """

    keywords: list[str] = field(default_factory=list)
    keyword_mode: str = "and"
    any_keywords: list[str] = field(default_factory=list)
    exclude_keywords: list[str] = field(default_factory=list)
    exact_phrase: str = ""
    from_account: str = ""
    to_account: str = ""
    mention_account: str = ""
    since_date: str = ""
    until_date: str = ""
    near_location: str = ""
    within_distance: str = ""
    language: str = "all"
    time_range: str = "all"
    min_faves: int = 0
    min_retweets: int = 0
    min_replies: int = 0
    media_type: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    question_only: bool = False
    custom_operators: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class QueryUpdate:
    """Sparse update for `QueryParams`; `None` leaves a field untouched."""

    keywords: Sequence[str] | None = None
    keyword_mode: str | None = None
    any_keywords: Sequence[str] | None = None
    exclude_keywords: Sequence[str] | None = None
    exact_phrase: str | None = None
    from_account: str | None = None
    to_account: str | None = None
    mention_account: str | None = None
    since_date: str | None = None
    until_date: str | None = None
    near_location: str | None = None
    within_distance: str | None = None
    language: str | None = None
    time_range: str | None = None
    min_faves: Any = None
    min_retweets: Any = None
    min_replies: Any = None
    media_type: Sequence[str] | None = None
    include: Sequence[str] | None = None
    exclude: Sequence[str] | None = None
    question_only: bool | None = None
    custom_operators: Sequence[str] | None = None


def default_query_params() -> QueryParams:
    """Return a fresh record with every filter disabled."""
    return QueryParams()


def coerce_count(value: Any) -> int:
    """Coerce an engagement threshold to a non-negative int.

    Accepts ints, floats and numeric strings. Anything else, including
    booleans and negative numbers, becomes 0. Values above `MAX_COUNT` are
    clamped to it.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return min(max(value, 0), MAX_COUNT)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return min(max(int(value), 0), MAX_COUNT)
    if isinstance(value, str):
        text = value.strip()
        try:
            return min(max(int(float(text)), 0), MAX_COUNT) if text else 0
        except (ValueError, OverflowError):
            return 0
    return 0


def clean_account(value: Any) -> str:
    """Strip surrounding whitespace and leading `@` characters from a handle."""
    if not isinstance(value, str):
        return ""
    return value.strip().lstrip("@").strip()


def unique_terms(values: Iterable[Any]) -> list[str]:
    """Return string items in order with exact duplicates removed."""
    out: list[str] = []
    for value in values:
        if not isinstance(value, str) or value in out:
            continue
        out.append(value)
    return out


def apply_update(current: QueryParams, update: QueryUpdate) -> QueryParams:
    """Merge a sparse update into a full record.

    The result is a new record built field by field; `current` is not
    modified and no list is shared between the two.

    Args:
        current: Record to start from.
        update: Fields to replace. `None` keeps the current value.

    Returns:
        Merged record.
    """
    return QueryParams(
        keywords=_pick_terms(update.keywords, current.keywords),
        keyword_mode=_pick_choice(update.keyword_mode, current.keyword_mode, KEYWORD_MODES),
        any_keywords=_pick_terms(update.any_keywords, current.any_keywords),
        exclude_keywords=_pick_terms(update.exclude_keywords, current.exclude_keywords),
        exact_phrase=_pick_text(update.exact_phrase, current.exact_phrase),
        from_account=_pick_text(update.from_account, current.from_account),
        to_account=_pick_text(update.to_account, current.to_account),
        mention_account=_pick_text(update.mention_account, current.mention_account),
        since_date=_pick_text(update.since_date, current.since_date),
        until_date=_pick_text(update.until_date, current.until_date),
        near_location=_pick_text(update.near_location, current.near_location),
        within_distance=_pick_text(update.within_distance, current.within_distance),
        language=_pick_choice(update.language, current.language, LANGUAGES),
        time_range=_pick_choice(update.time_range, current.time_range, TIME_RANGES),
        min_faves=coerce_count(current.min_faves if update.min_faves is None else update.min_faves),
        min_retweets=coerce_count(current.min_retweets if update.min_retweets is None else update.min_retweets),
        min_replies=coerce_count(current.min_replies if update.min_replies is None else update.min_replies),
        media_type=_pick_flags(update.media_type, current.media_type, MEDIA_TYPES),
        include=_pick_flags(update.include, current.include, INCLUDE_TYPES),
        exclude=_pick_flags(update.exclude, current.exclude, EXCLUDE_TYPES),
        question_only=bool(current.question_only if update.question_only is None else update.question_only),
        custom_operators=_pick_terms(update.custom_operators, current.custom_operators),
    )


def _pick_terms(new: Sequence[str] | None, old: Sequence[str]) -> list[str]:
    if new is None:
        return list(old)
    if isinstance(new, str):
        new = [new]
    return unique_terms(new)


def _pick_text(new: str | None, old: str) -> str:
    if new is None:
        return old
    return new if isinstance(new, str) else old


def _pick_choice(new: str | None, old: str, allowed: Sequence[str]) -> str:
    if isinstance(new, str) and new in allowed:
        return new
    return old


def _pick_flags(new: Sequence[str] | None, old: Sequence[str], allowed: Sequence[str]) -> list[str]:
    if new is None:
        return list(old)
    if isinstance(new, str):
        new = [new]
    return [item for item in unique_terms(new) if item in allowed]
