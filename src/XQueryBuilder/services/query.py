"""Query composition service.

Runs the full pipeline from structured parameters to an openable URL, and
the reverse trip from a saved query string to editable parameters.
"""

from __future__ import annotations

from dataclasses import dataclass

from XQueryBuilder.core.params import (
    QueryParams,
    QueryUpdate,
    apply_update,
    clean_account,
    default_query_params,
)
from XQueryBuilder.query.parser import parse_query_string
from XQueryBuilder.query.sanitize import is_valid_query_string, sanitize_keyword, sanitize_keywords
from XQueryBuilder.query.serializer import build_query_string
from XQueryBuilder.query.url import build_search_url
from XQueryBuilder.utils.log import log


@dataclass(frozen=True, slots=True)
class ComposedQuery:
    """Result of composing one set of parameters.

    Attributes:
        name: Optional display name.
        params: Sanitized parameters the query was built from.
        query: Compiled query string.
        url: Search URL, or None when the query is empty or unsafe.
        valid: Whether the query passed `is_valid_query_string`.
    """

    name: str | None
    params: QueryParams
    query: str
    url: str | None
    valid: bool


@dataclass(slots=True)
class QueryService:
    """Compose and reparse X search queries for one platform domain."""

    domain: str = "x.com"
    tab: str = "live"

    def sanitize(self, params: QueryParams) -> QueryParams:
        """Return a copy of `params` with free-text fields cleaned."""
        return apply_update(
            params,
            QueryUpdate(
                keywords=sanitize_keywords(params.keywords),
                any_keywords=sanitize_keywords(params.any_keywords),
                exclude_keywords=sanitize_keywords(params.exclude_keywords),
                exact_phrase=sanitize_keyword(params.exact_phrase),
                from_account=clean_account(params.from_account),
                to_account=clean_account(params.to_account),
                mention_account=clean_account(params.mention_account),
            ),
        )

    def compose(self, params: QueryParams, name: str | None = None) -> ComposedQuery:
        """Sanitize, compile and validate parameters.

        Args:
            params: Parameters to compile. Not modified.
            name: Optional display name carried into the result.

        Returns:
            Composed query with its URL when the query is usable.
        """
        clean = self.sanitize(params)
        query = build_query_string(clean)
        valid = is_valid_query_string(query)
        if query and not valid:
            log.warning("Query rejected by safety check: name=%s", name)
        url = self.url_for(query) if valid else None
        return ComposedQuery(name=name, params=clean, query=query, url=url, valid=valid)

    def url_for(self, query: str) -> str:
        return build_search_url(query, domain=self.domain, tab=self.tab)

    def reparse(self, query: str) -> QueryParams:
        """Parse a query string into a full record on top of the defaults."""
        return apply_update(default_query_params(), parse_query_string(query))

    def normalize(self, query: str) -> str:
        """Rebuild a query string in canonical field order."""
        return build_query_string(self.reparse(query))
