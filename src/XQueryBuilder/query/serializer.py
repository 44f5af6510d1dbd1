"""X search query compiler.

Compiles a structured `QueryParams` into the flat, operator-based string the
X search box accepts.

Field order (each field contributes one group, or nothing)
- keywords          -> `a b` or `(a OR b)` in OR mode with 2+ terms
- any_keywords      -> `(a OR b)`, always parenthesized
- exclude_keywords  -> `-a -b`
- exact_phrase      -> `"phrase"`
- from/to/mention   -> `from:h` `to:h` `@h`
- since/until       -> `since:d` `until:d`
- near/within       -> `near:loc` `within:10km`
- language          -> `lang:xx`
- time_range        -> `within_time:4h`
- min_*             -> `min_faves:n` `min_retweets:n` `min_replies:n`
- media_type        -> `filter:images` `filter:videos` `filter:links`
- include           -> `is:reply` `is:verified` `filter:spaces`
- exclude           -> `-is:retweet` `-is:reply` `-filter:links`
- question_only     -> `?`
- custom_operators  -> verbatim
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

from XQueryBuilder.core.params import (
    EXCLUDE_TYPES,
    INCLUDE_TYPES,
    MEDIA_TYPES,
    QueryParams,
    clean_account,
    coerce_count,
)

_RE_WS = re.compile(r"\s+")
_RE_CUSTOM_SPLIT = re.compile(r"[\n\r,]+")

MEDIA_OPERATORS = {
    "images": "filter:images",
    "videos": "filter:videos",
    "links": "filter:links",
}

INCLUDE_OPERATORS = {
    "replies": "is:reply",
    "verified": "is:verified",
    "spaces": "filter:spaces",
}

EXCLUDE_OPERATORS = {
    "retweets": "-is:retweet",
    "replies": "-is:reply",
    "links": "-filter:links",
}


def _is_quoted(t: str) -> bool:
    return len(t) >= 2 and t.startswith('"') and t.endswith('"')


def _quote(term: Any) -> str:
    if not isinstance(term, str):
        return ""
    t = term.strip()
    if not t:
        return ""
    if _is_quoted(t):
        return t
    if _RE_WS.search(t):
        return f'"{t}"'
    return t


def _terms(values: Iterable[Any]) -> list[str]:
    return [q for q in (_quote(v) for v in values or ()) if q]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _flags(selected: Sequence[str], order: Sequence[str], operators: dict[str, str]) -> list[str]:
    chosen = set(selected or ())
    return [operators[name] for name in order if name in chosen]


def split_custom_operators(values: Iterable[Any]) -> list[str]:
    """Split free-form operator entries on newlines and commas.

    Args:
        values: Raw entries, each possibly holding several operators.

    Returns:
        Trimmed, non-empty operators in the order given.
    """
    out: list[str] = []
    for value in values or ():
        if not isinstance(value, str):
            continue
        out.extend(part.strip() for part in _RE_CUSTOM_SPLIT.split(value) if part.strip())
    return out


def _keyword_group(params: QueryParams) -> str:
    terms = _terms(params.keywords)
    if params.keyword_mode == "or" and len(terms) >= 2:
        return "(" + " OR ".join(terms) + ")"
    return " ".join(terms)


def _any_group(params: QueryParams) -> str:
    terms = _terms(params.any_keywords)
    if not terms:
        return ""
    return "(" + " OR ".join(terms) + ")"


def build_query_string(params: QueryParams) -> str:
    """Compile query parameters into an X search string.

    Never raises and never modifies `params`; malformed counts are treated
    as 0 and blank fields are skipped.

    Args:
        params: Structured search filters.

    Returns:
        Space-separated query string, empty when no filter is set.
    """
    parts: list[str] = [
        _keyword_group(params),
        _any_group(params),
    ]
    parts.extend(f"-{t}" for t in _terms(params.exclude_keywords))

    phrase = _text(params.exact_phrase).strip('"').strip()
    if phrase:
        parts.append(f'"{phrase}"')

    from_account = clean_account(params.from_account)
    if from_account:
        parts.append(f"from:{from_account}")
    to_account = clean_account(params.to_account)
    if to_account:
        parts.append(f"to:{to_account}")
    mention = clean_account(params.mention_account)
    if mention:
        parts.append(f"@{mention}")

    since = _text(params.since_date)
    if since:
        parts.append(f"since:{since}")
    until = _text(params.until_date)
    if until:
        parts.append(f"until:{until}")

    near = _quote(params.near_location)
    if near:
        parts.append(f"near:{near}")
    within = _text(params.within_distance)
    if within:
        parts.append(f"within:{within}")

    if params.language and params.language != "all":
        parts.append(f"lang:{params.language}")
    if params.time_range and params.time_range != "all":
        parts.append(f"within_time:{params.time_range}")

    for operator, value in (
        ("min_faves", params.min_faves),
        ("min_retweets", params.min_retweets),
        ("min_replies", params.min_replies),
    ):
        count = coerce_count(value)
        if count > 0:
            parts.append(f"{operator}:{count}")

    parts.extend(_flags(params.media_type, MEDIA_TYPES, MEDIA_OPERATORS))
    parts.extend(_flags(params.include, INCLUDE_TYPES, INCLUDE_OPERATORS))
    parts.extend(_flags(params.exclude, EXCLUDE_TYPES, EXCLUDE_OPERATORS))

    if params.question_only:
        parts.append("?")

    parts.extend(split_custom_operators(params.custom_operators))

    return _RE_WS.sub(" ", " ".join(p for p in parts if p)).strip()
