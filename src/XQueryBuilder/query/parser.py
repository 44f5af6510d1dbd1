"""X search query parser.

Turns a query string back into a sparse `QueryUpdate` so saved or hand-edited
queries can be edited in structured form again.

Tokens are classified by an ordered matcher table; the first pattern that
matches wins. Several operators share prefixes (`filter:`, `is:`, `within`),
so the order below is significant. Tokens no matcher claims become keywords,
unless they look like operator syntax (contain `:` or start with `-`), in
which case they are kept verbatim as custom operators.

The parser is best-effort and never raises. It does not reconstruct
`any_keywords` or `exact_phrase`: parenthesized OR groups flatten into
`keywords` with OR mode, and quoted phrases become quoted keywords.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable

from XQueryBuilder.core.params import LANGUAGES, TIME_RANGES, QueryUpdate, clean_account
from XQueryBuilder.utils.log import log


@dataclass(slots=True)
class _ParseState:
    """Accumulator filled while walking the token list."""

    values: dict[str, Any] = field(default_factory=dict)
    keywords: list[str] = field(default_factory=list)
    media_type: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    custom_operators: list[str] = field(default_factory=list)

    def set(self, name: str, value: Any) -> None:
        self.values[name] = value

    def add(self, bucket: list[str], value: str) -> None:
        if value and value not in bucket:
            bucket.append(value)

    def to_update(self) -> QueryUpdate:
        return QueryUpdate(
            keywords=tuple(self.keywords),
            media_type=tuple(self.media_type),
            include=tuple(self.include),
            exclude=tuple(self.exclude),
            custom_operators=tuple(self.custom_operators),
            **self.values,
        )


Handler = Callable[[_ParseState, "re.Match[str]"], None]


def _choice_pattern(prefix: str, values: tuple[str, ...]) -> str:
    options = sorted((v for v in values if v != "all"), key=len, reverse=True)
    return "^" + re.escape(prefix) + "(" + "|".join(re.escape(v) for v in options) + ")$"


def _unquote(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def _set(name: str, convert: Callable[[str], Any] = str) -> Handler:
    def handler(state: _ParseState, match: re.Match[str]) -> None:
        state.set(name, convert(match.group(1)))

    return handler


def _flag(bucket: str, value: str) -> Handler:
    def handler(state: _ParseState, match: re.Match[str]) -> None:
        state.add(getattr(state, bucket), value)

    return handler


def _account(name: str) -> Handler:
    def handler(state: _ParseState, match: re.Match[str]) -> None:
        handle = clean_account(match.group(1))
        if handle:
            state.set(name, handle)
        else:
            state.add(state.custom_operators, match.group(0))

    return handler


def _near(state: _ParseState, match: re.Match[str]) -> None:
    state.set("near_location", _unquote(match.group(1)).strip())


def _question(state: _ParseState, match: re.Match[str]) -> None:
    state.set("question_only", True)


def _or(state: _ParseState, match: re.Match[str]) -> None:
    state.set("keyword_mode", "or")


_MATCHERS: tuple[tuple[re.Pattern[str], Handler], ...] = tuple(
    (re.compile(pattern), handler)
    for pattern, handler in (
        (_choice_pattern("lang:", LANGUAGES), _set("language")),
        (_choice_pattern("within_time:", TIME_RANGES), _set("time_range")),
        (r"^since:(.+)$", _set("since_date")),
        (r"^until:(.+)$", _set("until_date")),
        (r"^min_faves:(\d{1,18})$", _set("min_faves", int)),
        (r"^min_retweets:(\d{1,18})$", _set("min_retweets", int)),
        (r"^min_replies:(\d{1,18})$", _set("min_replies", int)),
        (r"^filter:images$", _flag("media_type", "images")),
        (r"^filter:(?:videos|native_video)$", _flag("media_type", "videos")),
        (r"^filter:links$", _flag("media_type", "links")),
        (r"^is:reply$", _flag("include", "replies")),
        (r"^is:verified$", _flag("include", "verified")),
        (r"^filter:spaces$", _flag("include", "spaces")),
        (r"^-is:retweet$", _flag("exclude", "retweets")),
        (r"^-(?:is:reply|filter:replies)$", _flag("exclude", "replies")),
        (r"^-filter:links$", _flag("exclude", "links")),
        (r"^from:(.+)$", _account("from_account")),
        (r"^to:(.+)$", _account("to_account")),
        (r"^@(.+)$", _account("mention_account")),
        (r"^near:(.+)$", _near),
        (r"^within:(.+)$", _set("within_distance")),
        (r"^\?$", _question),
        (r"^OR$", _or),
    )
)


def tokenize_query(query: Any) -> list[str]:
    """Split a query on whitespace, keeping double-quoted spans together.

    A quote may open mid-token (`source:"Twitter Web App"`) and the quoted
    span stays part of that token. An unterminated quote runs to the end of
    the input.

    Args:
        query: Raw query string. Non-string input yields no tokens.

    Returns:
        Tokens in input order.
    """
    if not isinstance(query, str):
        return []

    tokens: list[str] = []
    current: list[str] = []
    in_quote = False
    for ch in query:
        if ch == '"':
            in_quote = not in_quote
            current.append(ch)
        elif ch.isspace() and not in_quote:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def _strip_group_parens(token: str) -> str:
    t = token
    while t.startswith("(") and t.count("(") > t.count(")"):
        t = t[1:]
    while t.endswith(")") and t.count(")") > t.count("("):
        t = t[:-1]
    return t


def _classify_fallback(state: _ParseState, token: str) -> None:
    text = _strip_group_parens(token)
    bare = _unquote(text)
    if not bare.strip():
        return
    if ":" in bare or bare.startswith("-"):
        log.debug("Unrecognized operator kept verbatim: %s", text)
        state.add(state.custom_operators, text)
        return
    state.add(state.keywords, bare)


def parse_query_string(query: Any) -> QueryUpdate:
    """Parse an X search string into a sparse parameter update.

    `keywords`, `media_type`, `include`, `exclude` and `custom_operators` are
    always set (possibly empty). Other fields stay `None` unless a matching
    operator appears; a repeated operator overwrites the earlier value.

    Args:
        query: Query string. Non-string input is treated as empty.

    Returns:
        Update to apply on top of a `QueryParams` record.
    """
    state = _ParseState()
    for token in tokenize_query(query):
        for pattern, handler in _MATCHERS:
            match = pattern.match(token)
            if match:
                handler(state, match)
                break
        else:
            _classify_fallback(state, token)
    return state.to_update()
