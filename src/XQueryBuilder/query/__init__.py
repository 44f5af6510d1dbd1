"""Query string codec for X advanced search.

Public API for compiling `QueryParams` into a query string, parsing it back,
sanitizing free text and building search URLs.
"""

from __future__ import annotations

from XQueryBuilder.query.parser import parse_query_string, tokenize_query
from XQueryBuilder.query.sanitize import (
    is_valid_query_string,
    sanitize_keyword,
    sanitize_keywords,
    sanitize_name,
)
from XQueryBuilder.query.serializer import build_query_string, split_custom_operators
from XQueryBuilder.query.url import SEARCH_TABS, build_search_url

__all__ = [
    "build_query_string",
    "split_custom_operators",
    "parse_query_string",
    "tokenize_query",
    "sanitize_keyword",
    "sanitize_keywords",
    "sanitize_name",
    "is_valid_query_string",
    "build_search_url",
    "SEARCH_TABS",
]
