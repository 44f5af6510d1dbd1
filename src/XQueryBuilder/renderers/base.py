"""Base classes for output writers.

Provides abstraction for writing built queries to console or files.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from XQueryBuilder.services.query import ComposedQuery


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_query_result(self, composed: ComposedQuery) -> None:
        """Write one built query.

        Args:
            composed: Query string, URL and parameters of one configured query.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'build').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_query_result(self, composed: ComposedQuery) -> None:
        for writer in self.writers:
            writer.write_query_result(composed)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
