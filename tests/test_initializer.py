"""
Tests for genies.initializer
============================

This module contains tests for the ``genies init`` flow: defaults derived
from the project, prompted answers, confirmation and re-initialization.

Test Organization
-----------------
- TestDefaults: Tests for default configurations
- TestPrompts: Tests for prompted configurations
- TestRunInit: Tests for the complete flow
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from genies.config import load_config
from genies.exceptions import ConfigValidationError, UnresolvableAliasError
from genies.initializer import (
    default_config,
    parse_aliases,
    prompt_for_config,
    run_init,
)
from genies.models import FileExtension, GeniesConfig, NamingStyle
from genies.project import get_project_info
from genies.prompts import UnconditionalPrompter


NEXT_TSCONFIG = {"compilerOptions": {"paths": {"@/*": ["./src/*"]}}}


# =============================================================================
# Defaults Tests
# =============================================================================

class TestDefaults:
    """Tests for default_config."""

    def test_empty_project(self, project_dir: Path) -> None:
        config = default_config(get_project_info(project_dir))

        assert config.style is NamingStyle.KEBAB_CASE
        assert config.components_path == "~/components"
        assert config.tsx is False

    def test_project_alias(self, project_dir: Path, write_file: Callable) -> None:
        """Test that the project's own alias prefix is suggested."""
        write_file("tsconfig.json", NEXT_TSCONFIG)

        config = default_config(get_project_info(project_dir))

        assert config.components_path == "@/components"
        assert config.tsx is True

    def test_existing_config_kept(self, project_dir: Path) -> None:
        existing = GeniesConfig(style=NamingStyle.SNAKE_CASE, aliases=["ui"])

        config = default_config(get_project_info(project_dir), existing)

        assert config == existing
        assert config is not existing

    def test_parse_aliases(self) -> None:
        assert parse_aliases("ui, forms,,layout ") == ["ui", "forms", "layout"]
        assert parse_aliases("  ") == []


# =============================================================================
# Prompt Tests
# =============================================================================

class TestPrompts:
    """Tests for prompt_for_config."""

    def test_javascript_answers(self, project_dir: Path, scripted_prompter: Callable) -> None:
        """Test that JavaScript projects are also asked for js or jsx."""
        prompter = scripted_prompter(
            selects=["StartCase", "jsx"],
            texts=["./src/components", "ui, forms"],
        )

        values = prompt_for_config(get_project_info(project_dir), None, prompter)
        config = GeniesConfig(**values)

        assert prompter.kinds() == ["select", "text", "text", "select"]
        assert config.style is NamingStyle.START_CASE
        assert config.components_path == "./src/components"
        assert config.aliases == ["ui", "forms"]
        assert config.file_extension is FileExtension.JSX

    def test_typescript_skips_extension(
        self, project_dir: Path, write_file: Callable, scripted_prompter: Callable
    ) -> None:
        write_file("tsconfig.json", NEXT_TSCONFIG)
        prompter = scripted_prompter()

        values = prompt_for_config(get_project_info(project_dir), None, prompter)

        assert prompter.kinds() == ["select", "text", "text"]
        assert values["components_path"] == "@/components"
        assert values["aliases"] is None
        assert values["tsx"] is True

    def test_existing_values_offered(
        self, project_dir: Path, scripted_prompter: Callable
    ) -> None:
        """Test that unanswered prompts keep the existing configuration."""
        existing = GeniesConfig(
            style=NamingStyle.CAMEL_CASE,
            components_path="./ui",
            aliases=["forms"],
            tsx=False,
            file_extension=FileExtension.JSX,
        )

        values = prompt_for_config(get_project_info(project_dir), existing, scripted_prompter())

        assert GeniesConfig(**values) == existing


# =============================================================================
# Flow Tests
# =============================================================================

class TestRunInit:
    """Tests for run_init."""

    def test_defaults_yes(self, project_dir: Path) -> None:
        """Test unattended initialization of an empty project."""
        written = run_init(
            project_dir, yes=True, defaults=True, prompter=UnconditionalPrompter()
        )

        assert written == project_dir / "genies.config.mjs"
        text = written.read_text()
        assert '"style": "kebab-case"' in text
        assert '"componentsPath": "~/components"' in text

    def test_round_trip(self, project_dir: Path, scripted_prompter: Callable) -> None:
        """Test that the written configuration loads back as answered."""
        prompter = scripted_prompter(
            selects=["snake_case", "js"],
            texts=["./src/components", "ui"],
            confirms=[True],
        )

        run_init(project_dir, yes=False, defaults=False, prompter=prompter)

        assert load_config(project_dir) == GeniesConfig(
            style=NamingStyle.SNAKE_CASE,
            components_path="./src/components",
            aliases=["ui"],
            tsx=False,
            file_extension=FileExtension.JS,
        )

    def test_typescript_file_name(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", NEXT_TSCONFIG)

        written = run_init(
            project_dir, yes=True, defaults=True, prompter=UnconditionalPrompter()
        )

        assert written.name == "genies.config.ts"
        assert load_config(project_dir).components_path == "@/components"

    def test_declined(self, project_dir: Path, scripted_prompter: Callable) -> None:
        """Test that declining the final confirmation writes nothing."""
        prompter = scripted_prompter(confirms=[False])

        written = run_init(project_dir, yes=False, defaults=True, prompter=prompter)

        assert written is None
        assert list(project_dir.iterdir()) == []
        assert prompter.asked[-1][1] == "Write configuration to genies.config.mjs. Proceed?"

    def test_unresolvable_alias(
        self, project_dir: Path, write_file: Callable, scripted_prompter: Callable
    ) -> None:
        """Test that an unresolvable components path fails before writing."""
        write_file("tsconfig.json", NEXT_TSCONFIG)
        prompter = scripted_prompter(texts=["~/components"])

        with pytest.raises(UnresolvableAliasError):
            run_init(project_dir, yes=False, defaults=False, prompter=prompter)

        assert not (project_dir / "genies.config.ts").exists()

    def test_invalid_answers(self, project_dir: Path, scripted_prompter: Callable) -> None:
        prompter = scripted_prompter(texts=["   "])

        with pytest.raises(ConfigValidationError):
            run_init(project_dir, yes=False, defaults=False, prompter=prompter)

    def test_invalid_existing_config(self, project_dir: Path, write_file: Callable) -> None:
        """Test that an invalid configuration is reported, not replaced."""
        path = write_file(".geniesrc.json", {"style": "SHOUTING"})

        with pytest.raises(ConfigValidationError):
            run_init(project_dir, yes=True, defaults=True, prompter=UnconditionalPrompter())

        assert path.exists()
        assert not (project_dir / "genies.config.mjs").exists()

    def test_replaces_previous_file(self, project_dir: Path, write_file: Callable) -> None:
        """Test re-initialization of a project configured with an rc file."""
        previous = write_file(".geniesrc.json", {"style": "StartCase", "tsx": False})

        written = run_init(
            project_dir, yes=True, defaults=True, prompter=UnconditionalPrompter()
        )

        assert not previous.exists()
        assert written.name == "genies.config.mjs"
        assert load_config(project_dir).style is NamingStyle.START_CASE

    def test_updates_package_json(self, project_dir: Path, write_file: Callable) -> None:
        write_file("package.json", {"name": "app", "genies": {"style": "camelCase"}})

        written = run_init(
            project_dir, yes=True, defaults=True, prompter=UnconditionalPrompter()
        )

        assert written == project_dir / "package.json"
        assert load_config(project_dir).style is NamingStyle.CAMEL_CASE
