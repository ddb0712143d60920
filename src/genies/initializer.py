"""
genies.initializer - Configuration Creation Flow
================================================

Builds a configuration for ``genies init``, either from defaults or by
asking the user, checks that its components path resolves, and writes it.

A new configuration replaces the previous one wholesale; an invalid
existing configuration is reported instead of being overwritten silently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError
from rich.table import Table

from genies import logger
from genies.config import (
    config_file_name,
    find_config_source,
    format_validation_error,
    validate_source,
    write_config,
)
from genies.exceptions import ConfigValidationError
from genies.models import (
    DEFAULT_COMPONENTS_PATH,
    FileExtension,
    GeniesConfig,
    NamingStyle,
)
from genies.paths import resolve_config_paths
from genies.project import ProjectInfo, get_project_info
from genies.prompts import Choice


if TYPE_CHECKING:
    from pathlib import Path

    from genies.config import ConfigSource
    from genies.models import ResolvedConfig
    from genies.prompts import PromptProvider


JS_EXTENSIONS = (FileExtension.JS, FileExtension.JSX)


def default_components_path(info: ProjectInfo) -> str:
    """
    Suggested components path for a project.

    Uses the project's own alias prefix (``@/components``) when its
    tsconfig maps one to the root or ``src/``, else ``~/components``.
    """
    if info.alias_prefix:
        return f"{info.alias_prefix}/components"
    return DEFAULT_COMPONENTS_PATH


def default_config(info: ProjectInfo, existing: GeniesConfig | None = None) -> GeniesConfig:
    """Configuration used by ``genies init --defaults``."""
    if existing is not None:
        return existing.model_copy(deep=True)
    return GeniesConfig(
        components_path=default_components_path(info),
        tsx=info.is_tsx,
    )


def parse_aliases(raw: str) -> list[str]:
    """
    Split a comma separated alias answer.

    >>> parse_aliases("ui, forms,,layout ")
    ['ui', 'forms', 'layout']
    """
    return [alias.strip() for alias in raw.split(",") if alias.strip()]


def prompt_for_config(
    info: ProjectInfo,
    existing: GeniesConfig | None,
    prompter: PromptProvider,
) -> dict:
    """
    Ask for the configuration values.

    Existing values, or project-derived defaults, are offered as defaults.

    Returns
    -------
    dict
        Field values for ``GeniesConfig``; validated by the caller.
    """
    base = default_config(info, existing)

    style = prompter.select(
        "Which style would you like to use?",
        [Choice(f"{s.value:<11} ({s.example})", s.value) for s in NamingStyle],
        default=base.style.value,
    )
    components_path = prompter.text(
        "Configure the import alias for components:",
        default=base.components_path,
    )
    aliases = prompter.text(
        "Enter aliases for subdirectories (comma separated):",
        default=", ".join(base.subdirectories),
    )

    file_extension = base.file_extension
    if not base.tsx:
        current = base.file_extension if base.file_extension in JS_EXTENSIONS else FileExtension.JS
        file_extension = FileExtension(prompter.select(
            "Which file extension do you prefer for JavaScript files?",
            [Choice(ext.value, ext.value) for ext in JS_EXTENSIONS],
            default=current.value,
        ))

    return {
        "style": style,
        "components_path": components_path,
        "aliases": parse_aliases(aliases) or None,
        "tsx": base.tsx,
        "file_extension": file_extension,
    }


def build_config(values: dict, target: Path) -> GeniesConfig:
    """
    Validate prompted values.

    Raises
    ------
    ConfigValidationError
        If the values do not satisfy the schema.
    """
    try:
        return GeniesConfig(**values)
    except ValidationError as e:
        raise ConfigValidationError(target, format_validation_error(e)) from e


def print_summary(resolved: ResolvedConfig, info: ProjectInfo, target_name: str) -> None:
    """Show the detected project and the configuration about to be written."""
    config = resolved.config

    table = Table(title="genies Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Project", info.layout)
    table.add_row("Style", f"{config.style.value} ({config.style.example})")
    table.add_row("Components", config.components_path)
    table.add_row("Resolves to", resolved.relative(resolved.components_dir))
    table.add_row("Subdirectories", ", ".join(config.subdirectories) or "none")
    table.add_row("TypeScript", "yes" if config.tsx else "no")
    table.add_row("Extension", config.extension)
    table.add_row("File", target_name)

    logger.break_line()
    logger.console.print(table)
    logger.break_line()


def target_file_name(config: GeniesConfig, previous: ConfigSource | None) -> str:
    if previous is not None and previous.embedded:
        return previous.path.name
    return config_file_name(config.tsx)


def run_init(
    cwd: Path,
    *,
    yes: bool,
    defaults: bool,
    prompter: PromptProvider,
) -> Path | None:
    """
    Create or replace the project's configuration.

    Parameters
    ----------
    cwd : Path
        Project root (must exist).

    yes : bool
        Skip the final "write configuration?" confirmation.

    defaults : bool
        Use defaults (or the existing configuration) without asking.

    prompter : PromptProvider
        Answers the configuration questions.

    Returns
    -------
    Path | None
        The written file, or None when the user declined writing it.

    Raises
    ------
    ConfigValidationError
        If the existing configuration or the answers are invalid.
    UnresolvableAliasError
        If the components path cannot be resolved.
    ScaffoldIOError
        If the file cannot be written.
    """
    previous = find_config_source(cwd)
    existing = validate_source(previous) if previous is not None else None
    info = get_project_info(cwd)

    if defaults:
        config = default_config(info, existing)
    else:
        provisional = cwd / config_file_name(existing.tsx if existing else info.is_tsx)
        config = build_config(prompt_for_config(info, existing, prompter), provisional)

    resolved = resolve_config_paths(cwd, config)
    target_name = target_file_name(config, previous)

    if not yes:
        print_summary(resolved, info, target_name)
        if not prompter.confirm(f"Write configuration to {target_name}. Proceed?", default=True):
            return None

    with logger.spinner(f"Writing {target_name}..."):
        written = write_config(cwd, config, previous)

    shadow = find_config_source(cwd)
    if shadow is not None and shadow.path.resolve() != written.resolve():
        logger.warn(
            f"{shadow.path.name} takes precedence over {written.name}; "
            f"remove it to use the new configuration."
        )

    return written
