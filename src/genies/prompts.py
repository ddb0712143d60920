"""
genies.prompts - Prompt Providers
=================================

Every question genies asks goes through a ``PromptProvider``. The planner
and the init flow only see the protocol, so the same logic runs
interactively (``InteractivePrompter``, backed by questionary) or
unattended (``UnconditionalPrompter`` for ``--yes``), and tests can script
the answers.

Each prompt blocks until answered. A cancelled interactive prompt
(Ctrl-C / Esc) aborts the whole command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol

import questionary
import typer


if TYPE_CHECKING:
    from collections.abc import Sequence


class Choice(NamedTuple):
    """An option of a ``select`` prompt."""

    title: str
    value: str


class PromptProvider(Protocol):
    """Answers the questions asked by the planner and the init flow."""

    def confirm(self, message: str, *, default: bool) -> bool:
        """Ask a yes/no question."""
        ...

    def select(self, message: str, choices: Sequence[Choice], *, default: str) -> str:
        """Ask for one of ``choices``; returns the chosen value."""
        ...

    def text(self, message: str, *, default: str = "") -> str:
        """Ask for free text."""
        ...


class InteractivePrompter:
    """
    Prompt provider that asks on the terminal with questionary.

    Raises
    ------
    typer.Abort
        When the user cancels a prompt.
    """

    def confirm(self, message: str, *, default: bool) -> bool:
        result = questionary.confirm(message, default=default).ask()
        if result is None:
            raise typer.Abort()
        return result

    def select(self, message: str, choices: Sequence[Choice], *, default: str) -> str:
        result = questionary.select(
            message,
            choices=[questionary.Choice(title=c.title, value=c.value) for c in choices],
            default=default,
        ).ask()
        if result is None:
            raise typer.Abort()
        return result

    def text(self, message: str, *, default: str = "") -> str:
        result = questionary.text(message, default=default).ask()
        if result is None:
            raise typer.Abort()
        return result


class UnconditionalPrompter:
    """
    Prompt provider for ``--yes``: never blocks.

    Confirmations are answered affirmatively, so missing directories are
    still created. Selections and text prompts take their default.
    """

    def confirm(self, message: str, *, default: bool) -> bool:
        return True

    def select(self, message: str, choices: Sequence[Choice], *, default: str) -> str:
        return default

    def text(self, message: str, *, default: str = "") -> str:
        return default


def make_prompter(yes: bool) -> PromptProvider:
    """Prompt provider for a command run with or without ``--yes``."""
    return UnconditionalPrompter() if yes else InteractivePrompter()
