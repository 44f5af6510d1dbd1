"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

import click

from XQueryBuilder.cli.commands import Command, CommandContext
from XQueryBuilder.config import AppConfig
from XQueryBuilder.services import create_query_service
from XQueryBuilder.storage import create_storage
from XQueryBuilder.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, component creation, database context
    management, and error handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run(self, action: str, command: Command) -> None:
        """Execute one command with full resource management.

        Args:
            action: The CLI command name (e.g., 'build').
            command: Command to execute.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            db_manager, favorites, history = create_storage(self.config)
            ctx = CommandContext(
                config=self.config,
                service=create_query_service(self.config),
                favorites=favorites,
                history=history,
            )

            if db_manager:
                with db_manager:
                    command.execute(ctx)
            else:
                command.execute(ctx)

        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
