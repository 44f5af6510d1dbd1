"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from XQueryBuilder.cli.commands import (
    BuildCommand,
    FavoritesAddCommand,
    FavoritesListCommand,
    FavoritesRemoveCommand,
    FavoritesRenameCommand,
    HistoryClearCommand,
    HistoryListCommand,
    HistoryRemoveCommand,
    OpenCommand,
    ParseCommand,
    TemplatesCommand,
    UrlCommand,
)
from XQueryBuilder.cli.runner import CommandRunner
from XQueryBuilder.config import DEFAULT_CONFIG_PATH, load_config
from XQueryBuilder.data.templates import REGIONS
from XQueryBuilder.renderers import create_output_writer


@click.group(help="XQueryBuilder: build, parse and open X advanced search queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("build")
@click.pass_context
def build_cmd(ctx: click.Context) -> None:
    """Build every query from the config and print or save it.

    Raises:
        click.Abort: When building fails.
    """
    cfg = ctx.obj
    action = ctx.command.name
    CommandRunner(cfg).run(action, BuildCommand(output_writer=create_output_writer(cfg), action=action))


@cli.command("parse")
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Print parsed fields as JSON.")
@click.pass_context
def parse_cmd(ctx: click.Context, query: str, as_json: bool) -> None:
    """Parse QUERY into fields and show its normalized form."""
    CommandRunner(ctx.obj).run(ctx.command.name, ParseCommand(query=query, as_json=as_json))


@cli.command("url")
@click.argument("query")
@click.pass_context
def url_cmd(ctx: click.Context, query: str) -> None:
    """Print the search URL for QUERY."""
    CommandRunner(ctx.obj).run(ctx.command.name, UrlCommand(query=query))


@cli.command("open")
@click.argument("query")
@click.pass_context
def open_cmd(ctx: click.Context, query: str) -> None:
    """Open QUERY in the browser and record it in history."""
    CommandRunner(ctx.obj).run(ctx.command.name, OpenCommand(query=query))


@cli.command("templates")
@click.option("--region", type=click.Choice(REGIONS, case_sensitive=False), default=None, help="Only list one region.")
@click.pass_context
def templates_cmd(ctx: click.Context, region: str | None) -> None:
    """List built-in search templates."""
    CommandRunner(ctx.obj).run(ctx.command.name, TemplatesCommand(region=region))


@cli.group("favorites")
def favorites_group() -> None:
    """Manage saved favorite queries."""


@favorites_group.command("list")
@click.pass_context
def favorites_list_cmd(ctx: click.Context) -> None:
    CommandRunner(ctx.obj).run("favorites", FavoritesListCommand())


@favorites_group.command("add")
@click.argument("name")
@click.argument("query")
@click.pass_context
def favorites_add_cmd(ctx: click.Context, name: str, query: str) -> None:
    """Save QUERY under NAME."""
    CommandRunner(ctx.obj).run("favorites", FavoritesAddCommand(name=name, query=query))


@favorites_group.command("rename")
@click.argument("favorite_id")
@click.argument("name")
@click.pass_context
def favorites_rename_cmd(ctx: click.Context, favorite_id: str, name: str) -> None:
    CommandRunner(ctx.obj).run("favorites", FavoritesRenameCommand(favorite_id=favorite_id, name=name))


@favorites_group.command("remove")
@click.argument("favorite_id")
@click.pass_context
def favorites_remove_cmd(ctx: click.Context, favorite_id: str) -> None:
    CommandRunner(ctx.obj).run("favorites", FavoritesRemoveCommand(favorite_id=favorite_id))


@cli.group("history")
def history_group() -> None:
    """Inspect and prune search history."""


@history_group.command("list")
@click.pass_context
def history_list_cmd(ctx: click.Context) -> None:
    CommandRunner(ctx.obj).run("history", HistoryListCommand())


@history_group.command("remove")
@click.argument("entry_id")
@click.pass_context
def history_remove_cmd(ctx: click.Context, entry_id: str) -> None:
    CommandRunner(ctx.obj).run("history", HistoryRemoveCommand(entry_id=entry_id))


@history_group.command("clear")
@click.pass_context
def history_clear_cmd(ctx: click.Context) -> None:
    CommandRunner(ctx.obj).run("history", HistoryClearCommand())
