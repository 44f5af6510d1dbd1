"""Input cleanup for free text entering queries and favorites.

`sanitize_keyword` degrades bad input to an empty string so the caller can
carry on, while `sanitize_name` returns `None` to tell the caller to refuse
the save. `is_valid_query_string` is a denylist screen applied before a query
is embedded in a URL; it is deliberately permissive of search syntax.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Final

MAX_KEYWORD_LENGTH: Final[int] = 200
MAX_NAME_LENGTH: Final[int] = 100

_RE_TAG = re.compile(r"<[^>]*>")
# Control characters except tab, line feed and carriage return.
_RE_KEYWORD_CONTROL = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_RE_NAME_CONTROL = re.compile(r"[\x00-\x1F\x7F]")
_RE_NAME_UNSAFE = re.compile(r"[<>{}\\]")
_RE_WS = re.compile(r"\s+")

_DANGEROUS_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
)


def _collapse(text: str) -> str:
    return _RE_WS.sub(" ", text).strip()


def sanitize_keyword(value: Any) -> str:
    """Clean one keyword or phrase for use in a query.

    Removes tag-like markup and control characters, collapses whitespace and
    truncates to `MAX_KEYWORD_LENGTH`. Quotes and operator characters are kept.

    Args:
        value: Raw user input.

    Returns:
        Cleaned keyword, or "" when nothing usable remains.
    """
    if not isinstance(value, str) or not value:
        return ""
    text = _RE_TAG.sub("", value)
    text = _RE_KEYWORD_CONTROL.sub("", text)
    text = _collapse(text)
    return text[:MAX_KEYWORD_LENGTH].rstrip()


def sanitize_name(value: Any) -> str | None:
    """Clean a favorite name.

    Same cleanup as `sanitize_keyword`, plus removal of `< > { } \\` and a
    shorter `MAX_NAME_LENGTH` limit.

    Args:
        value: Raw user input.

    Returns:
        Cleaned name, or None when the input should be rejected.
    """
    if not isinstance(value, str) or not value:
        return None
    text = _RE_TAG.sub("", value)
    text = _RE_NAME_CONTROL.sub("", _collapse(text))
    text = _RE_NAME_UNSAFE.sub("", text)
    text = _collapse(text)[:MAX_NAME_LENGTH].rstrip()
    return text or None


def is_valid_query_string(query: Any) -> bool:
    """Return False when a query carries script or URL-scheme injection."""
    if not isinstance(query, str) or not query:
        return False
    return not any(pattern.search(query) for pattern in _DANGEROUS_PATTERNS)


def sanitize_keywords(values: Iterable[Any]) -> list[str]:
    """Sanitize a keyword list.

    Empty results are dropped and duplicates are removed case-insensitively,
    keeping the first spelling seen and the original order.

    Args:
        values: Raw keywords.

    Returns:
        Cleaned, unique keywords.
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return []
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        keyword = sanitize_keyword(value)
        if not keyword:
            continue
        folded = keyword.casefold()
        if folded in seen:
            continue
        seen.add(folded)
        out.append(keyword)
    return out
