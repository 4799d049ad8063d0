"""Typer CLI entrypoint for libman."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from libman.cli.bootstrap import (
    StartupError,
    configure_logging,
    connect_service,
    start_session,
)
from libman.cli.rendering import CliRenderer
from libman.cli.terminal import Terminal
from libman.config.global_config import (
    ConfigError,
    LibmanConfig,
    default_config_path,
    load_config,
)
from libman.control.context import ShellContext
from libman.control.dispatcher import Controller

app = typer.Typer(help="Interactive Spotify client.", add_completion=False)
_CONSOLE = Console()


def _resolve_config(config_file: Path | None) -> LibmanConfig:
    """Load config, warning and falling back to defaults when it is invalid.

    Args:
        config_file: Optional explicit config path.

    Returns:
        Effective configuration.
    """
    path = config_file or default_config_path()
    try:
        return load_config(path)
    except ConfigError as exc:
        _CONSOLE.print(
            f"Config warning: {exc}. Using defaults.",
            style="yellow",
            markup=False,
        )
        return LibmanConfig()


@app.command()
def main(
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config-file",
            file_okay=True,
            dir_okay=False,
            help="Path to a libman config YAML/JSON file.",
        ),
    ] = None,
) -> None:
    """Start the interactive libman shell.

    Args:
        config_file: Optional config file path override.

    Raises:
        Exit: Raised with a non-zero code when no session can be started.
    """
    config = _resolve_config(config_file)
    configure_logging(config.logging.level.value)
    try:
        service = connect_service(config)
        session = start_session(service, config)
    except StartupError as exc:
        _CONSOLE.print(str(exc), style="bold red", markup=False)
        raise typer.Exit(code=exc.exit_code) from exc
    _CONSOLE.print(f"welcome {session.display_name}", markup=False)
    context = ShellContext(
        service=service,
        session=session,
        terminal=Terminal(console=_CONSOLE),
        renderer=CliRenderer(console=_CONSOLE),
        config=config,
    )
    Controller(context).run()
