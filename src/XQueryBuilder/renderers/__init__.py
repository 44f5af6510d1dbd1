"""Output renderers for command results.

Provides abstraction and implementations for writing built queries to
various output formats (console, JSON), and a factory function to
instantiate writers based on configuration.
"""

from __future__ import annotations

from XQueryBuilder.config import AppConfig
from XQueryBuilder.renderers.base import MultiOutputWriter, OutputWriter
from XQueryBuilder.renderers.console import ConsoleOutputWriter, render_text
from XQueryBuilder.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.

    Returns:
        Writer delegating to every configured format.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
