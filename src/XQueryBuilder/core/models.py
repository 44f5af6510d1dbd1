from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from XQueryBuilder.core.params import QueryParams


@dataclass(frozen=True, slots=True)
class FavoriteQuery:
    """A saved, named query string.

    Attributes:
        id: Unique identifier.
        name: Display name, already sanitized.
        query: Query string in X search syntax.
        created_at: Creation time in epoch milliseconds.
        updated_at: Last modification time in epoch milliseconds.
    """

    id: str
    name: str
    query: str
    created_at: int
    updated_at: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "query": self.query,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FavoriteQuery:
        """Build a favorite from its stored mapping.

        Raises:
            ValueError: If a key is missing or has the wrong type.
        """
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            query=_require(data, "query", str),
            created_at=_require(data, "created_at", int),
            updated_at=_require(data, "updated_at", int),
        )


@dataclass(frozen=True, slots=True)
class SearchHistoryEntry:
    """One executed search.

    Attributes:
        id: Unique identifier.
        query: Query string that was opened.
        timestamp: Execution time in epoch milliseconds.
    """

    id: str
    query: str
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "query": self.query, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchHistoryEntry:
        """Build an entry from its stored mapping.

        Raises:
            ValueError: If a key is missing or has the wrong type.
        """
        return cls(
            id=_require(data, "id", str),
            query=_require(data, "query", str),
            timestamp=_require(data, "timestamp", int),
        )


@dataclass(frozen=True, slots=True)
class SearchTemplate:
    """Built-in ready-made query for a region."""

    id: str
    name: str
    description: str
    query: str
    region: str
    category: Optional[str] = None
    tags: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class NamedQuery:
    """Query parameters declared in the config file."""

    name: str | None
    params: QueryParams


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if not isinstance(data, Mapping) or key not in data:
        raise ValueError(f"Stored record is missing '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"Stored record field '{key}' must be {kind.__name__}")
    return value
