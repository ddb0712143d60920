"""
genies.logger - Console Output
==============================

Thin helpers around a shared Rich console so that every command reports
progress, warnings and errors with the same markup.

The error boundary lives here as well: ``handle_error`` turns any exception
that reaches a command into a red ``Error:`` line and ``typer.Exit(1)``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from genies.exceptions import GeniesError


if TYPE_CHECKING:
    from collections.abc import Iterator


# Console for rich output
console = Console(highlight=False)


def highlight(text: str) -> str:
    """Markup used for file names and option names."""
    return f"[cyan]{escape(text)}[/]"


def path_markup(text: str) -> str:
    """Markup used for directories."""
    return f"[magenta]{escape(text)}[/]"


def info(message: str = "") -> None:
    console.print(message)


def warn(message: str) -> None:
    console.print(f"[yellow]{message}[/]")


def error(message: str) -> None:
    console.print(f"[red]Error:[/] {message}")


def success(message: str) -> None:
    console.print(f"[green]✓[/] {message}")


def break_line() -> None:
    console.print()


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """
    Show a status spinner while the body runs.

    Prints a check mark with ``message`` when the body finishes without
    raising.
    """
    with console.status(message):
        yield
    success(message)


def handle_error(exc: BaseException) -> NoReturn:
    """
    Report an exception at the command boundary and exit with code 1.

    ``GeniesError`` messages are shown as-is; anything else is prefixed
    with its type so that unexpected failures are recognizable.
    """
    if isinstance(exc, GeniesError):
        error(escape(str(exc)))
    else:
        error(escape(f"{type(exc).__name__}: {exc}"))
    raise typer.Exit(1) from exc
