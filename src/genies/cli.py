"""
genies.cli - Command Line Interface
===================================

This module provides the command-line interface for genies using Typer.

Architecture
------------
    app (main entry point)
    ├── init     - Create or replace the project configuration
    └── add      - Add one or more components

Both commands are interactive by default. ``--yes`` swaps the questionary
prompts for an unconditional prompt provider so that they can run in
scripts and CI.

Usage Examples
--------------
Interactive mode:
    $ genies init
    $ genies add button

Non-interactive mode:
    $ genies init --defaults --yes
    $ genies add button "user card" --yes --path src/ui

Show help:
    $ genies --help
    $ genies add --help

See Also
--------
- planner.py: Per-component scaffold decisions
- initializer.py: Configuration creation flow
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.panel import Panel

from genies import __version__, logger
from genies.config import load_config
from genies.exceptions import GeniesError, MissingConfigurationError
from genies.initializer import run_init
from genies.models import ScaffoldRequest
from genies.naming import split_words
from genies.paths import resolve_config_paths
from genies.planner import run_batch
from genies.prompts import make_prompter


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="genies",
    help="Add React components to your apps.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """
    Display version information and exit.

    Parameters
    ----------
    value : bool
        True if --version was passed.
    """
    if value:
        logger.console.print(Panel(
            f"[bold green]genies[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Add React components to your apps[/]",
            border_style="green",
        ))
        raise typer.Exit()


def resolve_cwd(cwd: Path) -> Path:
    """Absolute working directory, or exit 1 when it does not exist."""
    resolved = cwd.expanduser().resolve()
    if not resolved.is_dir():
        logger.error(f"The path {logger.path_markup(str(cwd))} does not exist.")
        raise typer.Exit(1)
    return resolved


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]genies[/] - Add React components to your apps.

    [bold]Quick Start:[/]

        genies init
        genies add button
    """


# =============================================================================
# Init Command - Create the Configuration
# =============================================================================

@app.command()
def init(
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip all prompts, use defaults",
        ),
    ] = False,
    defaults: Annotated[
        bool,
        typer.Option(
            "--defaults",
            "-d",
            help="Use the default configuration without asking",
        ),
    ] = False,
    cwd: Annotated[
        Path,
        typer.Option(
            "--cwd",
            "-c",
            help="The working directory. Defaults to the current directory.",
        ),
    ] = Path("."),
) -> None:
    """
    Initialize your project's genies configuration.

    Detects TypeScript and the project's import alias, asks for the naming
    style, the components path and subdirectory aliases, and writes
    [cyan]genies.config.ts[/] (or [cyan]genies.config.mjs[/]).

    [bold]Examples:[/]

        genies init
        genies init --defaults --yes
        genies init --cwd ./apps/web
    """
    root = resolve_cwd(cwd)

    try:
        written = run_init(
            root,
            yes=yes,
            defaults=defaults or yes,
            prompter=make_prompter(yes),
        )
    except (GeniesError, OSError) as e:
        logger.handle_error(e)

    if written is None:
        logger.info("Configuration not written.")
        raise typer.Exit()

    logger.break_line()
    logger.console.print(Panel(
        f"Configuration written to [cyan]{written.name}[/]\n\n"
        f"[bold]Next steps:[/]\n"
        f"  genies add <component>",
        title="[green]genies is ready[/]",
        border_style="green",
    ))


# =============================================================================
# Add Command - Scaffold Components
# =============================================================================

@app.command()
def add(
    components: Annotated[
        list[str],
        typer.Argument(
            help="Names of the components to add",
        ),
    ],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompts",
        ),
    ] = False,
    overwrite: Annotated[
        bool,
        typer.Option(
            "--overwrite",
            "-o",
            help="Overwrite existing files",
        ),
    ] = False,
    cwd: Annotated[
        Path,
        typer.Option(
            "--cwd",
            "-c",
            help="The working directory. Defaults to the current directory.",
        ),
    ] = Path("."),
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="The path to add the components to",
        ),
    ] = None,
) -> None:
    """
    Add components to your project.

    Each argument is one component. The file name follows the configured
    naming style; the component itself is always StartCase.

    [bold]Examples:[/]

        genies add button
        genies add "user card" avatar --yes
        genies add modal --path src/overlays --overwrite
    """
    root = resolve_cwd(cwd)

    empty = [name for name in components if not split_words(name)]
    if empty:
        logger.error("Component names must contain at least one letter or digit.")
        raise typer.Exit(1)

    try:
        config = load_config(root)
        if config is None:
            raise MissingConfigurationError(root)

        resolved = resolve_config_paths(root, config)
        request = ScaffoldRequest(
            components=components,
            cwd=root,
            path=path,
            yes=yes,
            overwrite=overwrite,
        )
        result = run_batch(request, resolved, make_prompter(yes))
    except (GeniesError, OSError) as e:
        logger.handle_error(e)

    if not result.success:
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
