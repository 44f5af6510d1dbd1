"""Service layer for XQueryBuilder.

Provides the query composition service and its factory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from XQueryBuilder.services.query import ComposedQuery, QueryService

if TYPE_CHECKING:
    from XQueryBuilder.config import AppConfig


def create_query_service(config: AppConfig) -> QueryService:
    """Create a query service for the configured domain and result tab.

    Args:
        config: Application configuration containing search settings.

    Returns:
        Configured QueryService instance.
    """
    return QueryService(domain=config.search.domain, tab=config.search.tab)


__all__ = [
    "ComposedQuery",
    "QueryService",
    "create_query_service",
]
