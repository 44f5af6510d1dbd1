"""CLI package for XQueryBuilder command orchestration.

This package contains the click interface, the command runner and the
command implementations.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from XQueryBuilder.cli.runner import CommandRunner
from XQueryBuilder.cli.ui import cli


def main() -> None:
    """Run XQueryBuilder CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
