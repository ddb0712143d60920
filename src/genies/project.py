"""
genies.project - Host Project Inspection
========================================

Detects what kind of front-end project genies runs in so that ``genies
init`` can offer sensible defaults: TypeScript vs JavaScript, ``src/`` and
``app/`` directories, the Next.js router flavour and the import alias
prefix declared in ``tsconfig.json``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from genies.paths import load_path_mappings


class ProjectType(str, Enum):
    """Next.js project layouts genies recognizes."""

    NEXT_APP = "next-app"
    NEXT_APP_SRC = "next-app-src"
    NEXT_PAGES = "next-pages"
    NEXT_PAGES_SRC = "next-pages-src"

    @property
    def description(self) -> str:
        descriptions = {
            ProjectType.NEXT_APP: "Next.js with the app router",
            ProjectType.NEXT_APP_SRC: "Next.js with the app router in src/",
            ProjectType.NEXT_PAGES: "Next.js with the pages router",
            ProjectType.NEXT_PAGES_SRC: "Next.js with the pages router in src/",
        }
        return descriptions[self]


@dataclass
class ProjectInfo:
    """
    Facts about the host project.

    Attributes
    ----------
    is_tsx : bool
        True when the project has a ``tsconfig.json``.

    src_dir : bool
        True when a ``src/`` directory exists.

    app_dir : bool
        True when ``app/`` or ``src/app/`` exists.

    project_type : ProjectType | None
        Next.js layout, or None for other projects.

    alias_prefix : str | None
        Import alias prefix mapped to the project root or ``src/``
        (``@`` for ``"@/*": ["./src/*"]``).
    """

    is_tsx: bool
    src_dir: bool
    app_dir: bool
    project_type: ProjectType | None = None
    alias_prefix: str | None = None

    @property
    def layout(self) -> str:
        """Human-readable project layout for the init summary."""
        if self.project_type is not None:
            return self.project_type.description

        language = "TypeScript" if self.is_tsx else "JavaScript"
        folders = [
            name for name, present in (("src/", self.src_dir), ("app/", self.app_dir)) if present
        ]
        if folders:
            return f"{language} with {' and '.join(folders)}"
        return language


def is_typescript_project(cwd: Path) -> bool:
    return (cwd / "tsconfig.json").is_file()


def get_project_type(cwd: Path) -> ProjectType | None:
    """Detect the Next.js layout from ``next.config.*`` and the directories."""
    if not any(cwd.glob("next.config.*")):
        return None

    uses_src = (cwd / "src").is_dir()
    uses_app = (cwd / ("src/app" if uses_src else "app")).is_dir()

    if uses_app:
        return ProjectType.NEXT_APP_SRC if uses_src else ProjectType.NEXT_APP
    return ProjectType.NEXT_PAGES_SRC if uses_src else ProjectType.NEXT_PAGES


def get_alias_prefix(cwd: Path) -> str | None:
    """
    Alias prefix that maps to the project root or ``src/``.

    Returns the literal prefix of the first ``paths`` entry whose targets
    include ``./*`` or ``./src/*``, without the trailing slash.

    Raises
    ------
    UnresolvableAliasError
        If ``tsconfig.json``/``jsconfig.json`` exists but cannot be parsed.
    """
    table = load_path_mappings(cwd)
    if table is None:
        return None

    for mapping in table.mappings:
        if mapping.has_wildcard and {"./*", "./src/*"} & set(mapping.targets):
            return mapping.prefix.rstrip("/") or None
    return None


def get_project_info(cwd: Path) -> ProjectInfo:
    """Inspect the project rooted at ``cwd``."""
    return ProjectInfo(
        is_tsx=is_typescript_project(cwd),
        src_dir=(cwd / "src").is_dir(),
        app_dir=(cwd / "app").is_dir() or (cwd / "src" / "app").is_dir(),
        project_type=get_project_type(cwd),
        alias_prefix=get_alias_prefix(cwd),
    )
