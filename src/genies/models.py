"""
genies.models - Configuration and Scaffolding Models
====================================================

This module defines the data models used throughout genies. The persisted
configuration is a Pydantic model so that a hand-edited configuration file
is validated with clear error messages; the per-invocation request and plan
objects are plain dataclasses.

Architecture Notes
------------------
The models are organized as follows:

    GeniesConfig (persisted)
    ├── style: NamingStyle (enum)
    ├── componentsPath: str
    ├── aliases: list[str] | None
    ├── tsx: bool
    └── fileExtension: FileExtension | None (enum)

    ResolvedConfig (per invocation, never persisted)
    ├── config: GeniesConfig
    ├── cwd: Path
    └── components_dir: Path

    ScaffoldRequest  -> input of one ``genies add`` run
    ScaffoldPlan     -> decision for one component name

Usage Example
-------------
>>> from genies.models import GeniesConfig, NamingStyle
>>> config = GeniesConfig(style=NamingStyle.START_CASE, tsx=False)
>>> config.extension
'js'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Constants
# =============================================================================

#: Reserved marker that prefixes a logical alias (``~/components``).
ALIAS_MARKER = "~"

DEFAULT_COMPONENTS_PATH = "~/components"


# =============================================================================
# Enumerations
# =============================================================================

class NamingStyle(str, Enum):
    """
    Case conventions applied to a component name to build its file name.

    Examples
    --------
    >>> NamingStyle("kebab-case")
    <NamingStyle.KEBAB_CASE: 'kebab-case'>
    >>> NamingStyle.START_CASE.example
    'MyButton'
    """

    CAMEL_CASE = "camelCase"
    KEBAB_CASE = "kebab-case"
    SNAKE_CASE = "snake_case"
    START_CASE = "StartCase"

    @property
    def example(self) -> str:
        """File name produced for ``"my button"``, shown in prompts."""
        examples = {
            NamingStyle.CAMEL_CASE: "myButton",
            NamingStyle.KEBAB_CASE: "my-button",
            NamingStyle.SNAKE_CASE: "my_button",
            NamingStyle.START_CASE: "MyButton",
        }
        return examples[self]


class FileExtension(str, Enum):
    """File extensions a generated component may use."""

    TSX = "tsx"
    TS = "ts"
    JSX = "jsx"
    JS = "js"


class Disposition(str, Enum):
    """
    Terminal outcome of planning a single component.

    Attributes
    ----------
    CREATE : str
        The component file will be written.

    SKIP : str
        The user declined an overwrite or a cross-directory duplicate.
        Remaining components in the batch continue.

    ABORT : str
        The user declined creating a missing directory.
    """

    CREATE = "create"
    SKIP = "skip"
    ABORT = "abort"


# =============================================================================
# Persisted Configuration
# =============================================================================

class GeniesConfig(BaseModel):
    """
    Persisted genies configuration.

    The schema is closed: unknown keys are rejected so that typos in a
    hand-edited file surface as validation errors. Keys are camelCase on
    disk (``componentsPath``, ``fileExtension``) and snake_case in Python;
    configuration files are validated by the camelCase names only.

    Attributes
    ----------
    style : NamingStyle
        Naming convention for generated file names.

    components_path : str
        Root directory for components. Either a logical alias such as
        ``~/components`` or a relative/absolute filesystem path.

    aliases : list[str] | None
        Subdirectories of the components root (``ui``, ``forms``). Order is
        kept for display only.

    tsx : bool
        Whether the project is written in TypeScript.

    file_extension : FileExtension | None
        Explicit extension for generated files. Derived from ``tsx`` when
        absent.

    Examples
    --------
    >>> GeniesConfig().extension
    'tsx'
    >>> GeniesConfig(tsx=False, file_extension="jsx").extension
    'jsx'
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    style: NamingStyle = Field(
        default=NamingStyle.KEBAB_CASE,
        description="Naming convention for component file names",
    )
    components_path: str = Field(
        default=DEFAULT_COMPONENTS_PATH,
        description="Alias or path of the components root directory",
        strict=True,
    )
    aliases: list[str] | None = Field(
        default=None,
        description="Subdirectories inside the components root",
    )
    tsx: bool = Field(
        default=True,
        description="Whether the project uses TypeScript",
        strict=True,
    )
    file_extension: FileExtension | None = Field(
        default=None,
        description="Extension of generated component files",
    )

    @field_validator("components_path")
    @classmethod
    def strip_components_path(cls, v: str) -> str:
        """Strip surrounding whitespace; reject blank paths."""
        v = v.strip()
        if not v:
            msg = "componentsPath must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("aliases")
    @classmethod
    def normalize_aliases(cls, v: list[str] | None) -> list[str] | None:
        """
        Strip alias names and drop empty entries and duplicates.

        Insertion order is preserved. Aliases must be plain relative
        subdirectory names, never absolute paths.
        """
        if v is None:
            return None

        seen: list[str] = []
        for alias in v:
            alias = alias.strip()
            if Path(alias).is_absolute() or ".." in Path(alias).parts:
                msg = f"Alias '{alias}' must be a subdirectory of the components path"
                raise ValueError(msg)
            alias = alias.rstrip("/")
            if alias in {"", "."} or alias in seen:
                continue
            seen.append(alias)
        return seen

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def extension(self) -> str:
        """
        Extension of generated component files.

        ``file_extension`` wins when present; otherwise ``tsx`` for
        TypeScript projects and ``js`` for JavaScript projects.
        """
        if self.file_extension is not None:
            return self.file_extension.value
        return FileExtension.TSX.value if self.tsx else FileExtension.JS.value

    @property
    def subdirectories(self) -> list[str]:
        """Declared subdirectory aliases (empty list when none)."""
        return list(self.aliases or [])

    def to_file_dict(self) -> dict:
        """
        Convert the config to the camelCase mapping written to disk.

        ``None`` fields are omitted so that derived values (such as the
        extension) stay derived after a round-trip.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Per-Invocation Models
# =============================================================================

@dataclass
class ResolvedConfig:
    """
    A configuration together with the absolute directories it points at.

    Attributes
    ----------
    config : GeniesConfig
        The loaded configuration.

    cwd : Path
        Absolute project root the command runs in.

    components_dir : Path
        Absolute components root, after alias resolution.
    """

    config: GeniesConfig
    cwd: Path
    components_dir: Path

    @property
    def alias_dirs(self) -> dict[str, Path]:
        """Absolute directory of each declared subdirectory alias, in order."""
        return {
            alias: self.components_dir / alias
            for alias in self.config.subdirectories
        }

    @property
    def known_dirs(self) -> list[Path]:
        """Components root followed by every alias directory."""
        return [self.components_dir, *self.alias_dirs.values()]

    def relative(self, path: Path) -> str:
        """Render ``path`` relative to the project root when possible."""
        try:
            return str(path.relative_to(self.cwd)) or "."
        except ValueError:
            return str(path)


@dataclass
class ScaffoldRequest:
    """
    Input of one ``genies add`` invocation.

    Attributes
    ----------
    components : list[str]
        Raw component names; one planner run per name.

    cwd : Path
        Project root.

    path : Path | None
        Explicit target directory overriding the subdirectory question.

    yes : bool
        Answer confirmations affirmatively without prompting.

    overwrite : bool
        Overwrite existing files in the target directory without prompting.
    """

    components: list[str]
    cwd: Path
    path: Path | None = None
    yes: bool = False
    overwrite: bool = False


@dataclass
class ScaffoldPlan:
    """
    Decision produced by the planner for a single component.

    Attributes
    ----------
    component : str
        Raw component name as requested.

    directory : Path
        Absolute directory the file is written to.

    file_name : str
        File name including extension.

    symbol_name : str
        Identifier substituted into the component template.

    disposition : Disposition
        ``create``, ``skip`` or ``abort``.

    conflicts : list[Path]
        Files with the same name found in other known directories.

    overwrites : bool
        True when the target file already exists and will be replaced.
    """

    component: str
    directory: Path
    file_name: str
    symbol_name: str
    disposition: Disposition
    conflicts: list[Path] = field(default_factory=list)
    overwrites: bool = False

    @property
    def file_path(self) -> Path:
        """Absolute path of the component file."""
        return self.directory / self.file_name

    @property
    def extension(self) -> str:
        """Extension of ``file_name`` without the dot."""
        return Path(self.file_name).suffix.lstrip(".")
