"""
pytest configuration and shared fixtures for genies tests.

This module provides fixtures and configuration used across all test modules.
Fixtures defined here are automatically available to all tests.

Fixtures
--------
project_dir : Path
    An empty, resolved project root inside a temporary directory.

write_file : Callable
    Writes a text or JSON file relative to ``project_dir``.

scripted_prompter : Callable
    Factory for a prompt provider that answers from scripted queues.
"""

import json
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from genies.prompts import Choice


class ScriptedPrompter:
    """
    Prompt provider that replays scripted answers.

    Each prompt kind pops from its own queue; once a queue is exhausted the
    prompt's default is returned. Every question is recorded in ``asked``
    as ``(kind, message)``.
    """

    def __init__(
        self,
        confirms: Sequence[bool] = (),
        selects: Sequence[str] = (),
        texts: Sequence[str] = (),
    ) -> None:
        self.confirms = list(confirms)
        self.selects = list(selects)
        self.texts = list(texts)
        self.asked: list[tuple[str, str]] = []
        self.choices: list[list[Choice]] = []

    def confirm(self, message: str, *, default: bool) -> bool:
        self.asked.append(("confirm", message))
        return self.confirms.pop(0) if self.confirms else default

    def select(self, message: str, choices: Sequence[Choice], *, default: str) -> str:
        self.asked.append(("select", message))
        self.choices.append(list(choices))
        return self.selects.pop(0) if self.selects else default

    def text(self, message: str, *, default: str = "") -> str:
        self.asked.append(("text", message))
        return self.texts.pop(0) if self.texts else default

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.asked]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create an empty project root.

    The path is resolved so that comparisons with resolved paths hold on
    platforms where the temporary directory is a symlink.

    Returns
    -------
    Path
        Path to the project root.
    """
    root = tmp_path / "app"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_file(project_dir: Path) -> Callable[[str, object], Path]:
    """
    Provide a helper that writes files into the project root.

    Strings are written as-is; anything else is serialized as JSON.
    Parent directories are created as needed.
    """

    def _write(relative: str, content: object) -> Path:
        path = project_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = json.dumps(content, indent=2)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scripted_prompter() -> Callable[..., ScriptedPrompter]:
    """Provide the ``ScriptedPrompter`` factory."""
    return ScriptedPrompter


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """
    Configure pytest with custom markers.

    This function is called by pytest during startup to register
    custom markers used in our test suite.
    """
    config.addinivalue_line(
        "markers", "cli: marks tests that drive the Typer application"
    )
