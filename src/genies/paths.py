"""
genies.paths - Alias Path Resolution
====================================

Resolves logical import aliases such as ``~/components`` or
``@/components`` to absolute directories using the host project's compiler
path mapping (``compilerOptions.paths`` in ``tsconfig.json``, or
``jsconfig.json`` for JavaScript projects).

Matching follows the compiler's rules so that imports of generated
components resolve with the project's own toolchain:

1. A pattern without ``*`` matches only the identical specifier and beats
   every wildcard pattern.
2. A pattern ``prefix*suffix`` matches a specifier that starts with
   ``prefix`` and ends with ``suffix``; the text in between is substituted
   for ``*`` in the targets.
3. Among matching wildcard patterns the one with the longest ``prefix``
   wins; ties go to the pattern declared first.

Targets are resolved against ``baseUrl`` when set, otherwise against the
directory of the config file that declares ``paths``.

Example
-------
Given ``"paths": {"@/*": ["./src/*"]}`` in ``/app/tsconfig.json``:

>>> table = load_path_mappings(Path("/app"))
>>> resolve_alias("@/components", table)
PosixPath('/app/src/components')
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from genies.exceptions import UnresolvableAliasError
from genies.models import ALIAS_MARKER, GeniesConfig, ResolvedConfig


TSCONFIG_FILES = ("tsconfig.json", "jsconfig.json")

_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

_QUOTES = "\"'`"


# =============================================================================
# JSON With Comments
# =============================================================================

def strip_comments(text: str) -> str:
    """
    Remove ``//`` and ``/* */`` comments outside of string literals.

    Quotes of all three JavaScript kinds are honoured, so patterns like
    ``"@/*"`` survive intact.
    """
    out: list[str] = []
    i, n = 0, len(text)
    quote: str | None = None

    while i < n:
        ch = text[i]
        if quote is not None:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
        elif ch in _QUOTES:
            quote = ch
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def parse_jsonc(text: str) -> object:
    """Parse JSON that may contain comments and trailing commas."""
    return json.loads(_TRAILING_COMMA_RE.sub(r"\1", strip_comments(text)))


# =============================================================================
# Path Mapping Table
# =============================================================================

@dataclass(frozen=True)
class PathMapping:
    """
    One ``compilerOptions.paths`` entry.

    Attributes
    ----------
    pattern : str
        Key of the entry, e.g. ``@/*``.

    targets : tuple[str, ...]
        Target patterns, e.g. ``("./src/*",)``.
    """

    pattern: str
    targets: tuple[str, ...]

    @property
    def has_wildcard(self) -> bool:
        return "*" in self.pattern

    @property
    def prefix(self) -> str:
        return self.pattern.split("*", 1)[0]

    @property
    def suffix(self) -> str:
        return self.pattern.split("*", 1)[1] if self.has_wildcard else ""

    def capture(self, specifier: str) -> str | None:
        """
        Text matched by ``*``, or None if the pattern does not match.

        An exact (wildcard-free) match captures the empty string.
        """
        if not self.has_wildcard:
            return "" if specifier == self.pattern else None

        prefix, suffix = self.prefix, self.suffix
        if (
            len(specifier) >= len(prefix) + len(suffix)
            and specifier.startswith(prefix)
            and specifier.endswith(suffix)
        ):
            return specifier[len(prefix):len(specifier) - len(suffix)]
        return None


@dataclass(frozen=True)
class PathMappingTable:
    """
    Parsed path mapping of a project.

    Attributes
    ----------
    source : Path
        ``tsconfig.json`` or ``jsconfig.json`` the table was loaded from.

    base_dir : Path
        Absolute directory targets are resolved against.

    mappings : tuple[PathMapping, ...]
        Entries in declaration order.
    """

    source: Path
    base_dir: Path
    mappings: tuple[PathMapping, ...] = ()


def parse_mappings(paths: object, source: Path) -> tuple[PathMapping, ...]:
    """
    Convert a raw ``paths`` object into an ordered tuple of mappings.

    Raises
    ------
    UnresolvableAliasError
        If ``paths`` is not an object of string or string-list values.
    """
    if not isinstance(paths, dict):
        raise UnresolvableAliasError(f"compilerOptions.paths in {source} must be an object.")

    mappings = []
    for pattern, targets in paths.items():
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
            raise UnresolvableAliasError(
                f"compilerOptions.paths['{pattern}'] in {source} must be a list of strings."
            )
        mappings.append(PathMapping(pattern=pattern, targets=tuple(targets)))
    return tuple(mappings)


def _read_compiler_options(path: Path, chain: frozenset[Path]) -> dict:
    """
    Collect ``baseUrl`` and ``paths`` along a relative ``extends`` chain.

    Values declared by ``path`` override those inherited from the configs
    it extends. Package (non-relative) ``extends`` entries are ignored.
    """
    path = path.resolve()
    if path in chain:
        raise UnresolvableAliasError(f"Circular 'extends' in {path}.")

    try:
        data = parse_jsonc(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise UnresolvableAliasError(f"Failed to load {path.name}. {e}") from e

    if not isinstance(data, dict):
        raise UnresolvableAliasError(f"Failed to load {path.name}. Expected an object.")

    options: dict = {}

    extends = data.get("extends")
    parents = extends if isinstance(extends, list) else [extends]
    for parent in parents:
        if isinstance(parent, str) and parent.startswith("."):
            parent_path = path.parent / parent
            if parent_path.suffix != ".json":
                parent_path = parent_path.with_name(parent_path.name + ".json")
            options.update(_read_compiler_options(parent_path, chain | {path}))

    compiler_options = data.get("compilerOptions") or {}
    if not isinstance(compiler_options, dict):
        raise UnresolvableAliasError(f"compilerOptions in {path.name} must be an object.")
    if "baseUrl" in compiler_options:
        options["base_url"] = (path.parent / str(compiler_options["baseUrl"])).resolve()
    if "paths" in compiler_options:
        options["paths"] = compiler_options["paths"]
        options["paths_source"] = path
    return options


def load_path_mapping_table(path: Path) -> PathMappingTable:
    """
    Load the path mapping declared by one tsconfig/jsconfig file.

    Raises
    ------
    UnresolvableAliasError
        If the file (or a file it extends) cannot be read or parsed.
    """
    options = _read_compiler_options(path, frozenset())
    paths_source: Path = options.get("paths_source", path.resolve())
    base_dir = options.get("base_url") or paths_source.parent

    mappings = parse_mappings(options["paths"], paths_source) if "paths" in options else ()
    return PathMappingTable(source=path, base_dir=base_dir, mappings=mappings)


def load_path_mappings(cwd: Path) -> PathMappingTable | None:
    """
    Load the project's path mapping table.

    Returns
    -------
    PathMappingTable | None
        The table from ``tsconfig.json`` (or ``jsconfig.json``), or None
        when the project has neither file.
    """
    for name in TSCONFIG_FILES:
        path = cwd / name
        if path.is_file():
            return load_path_mapping_table(path)
    return None


# =============================================================================
# Matching and Resolution
# =============================================================================

def match_mapping(
    specifier: str,
    mappings: tuple[PathMapping, ...],
) -> tuple[PathMapping, str] | None:
    """
    Select the mapping that applies to ``specifier``.

    Returns
    -------
    tuple[PathMapping, str] | None
        The winning mapping and the text captured by its ``*``, or None.
    """
    for mapping in mappings:
        if not mapping.has_wildcard and mapping.pattern == specifier:
            return mapping, ""

    best: tuple[PathMapping, str] | None = None
    for mapping in mappings:
        if not mapping.has_wildcard:
            continue
        captured = mapping.capture(specifier)
        if captured is None:
            continue
        if best is None or len(mapping.prefix) > len(best[0].prefix):
            best = (mapping, captured)
    return best


def resolve_alias(specifier: str, table: PathMappingTable) -> Path:
    """
    Resolve an alias specifier to an absolute path.

    The captured text is substituted into every target; the first target
    that exists on disk wins, otherwise the first target is used (the
    directory may not have been created yet).

    Raises
    ------
    UnresolvableAliasError
        If no mapping matches ``specifier``.
    """
    match = match_mapping(specifier, table.mappings)
    if match is None or not match[0].targets:
        raise UnresolvableAliasError(
            f"No path mapping in {table.source.name} matches '{specifier}'. "
            f"Add a matching entry to compilerOptions.paths "
            f"(for example \"{specifier.split('/', 1)[0]}/*\": [\"./*\"]) "
            "or use a relative componentsPath."
        )

    mapping, captured = match
    candidates = [
        (table.base_dir / target.replace("*", captured, 1)).resolve()
        for target in mapping.targets
    ]
    return next((c for c in candidates if c.exists()), candidates[0])


def is_relative_or_absolute(path: str) -> bool:
    return path.startswith(("./", "../")) or path in {".", ".."} or Path(path).is_absolute()


def is_alias(path: str, table: PathMappingTable | None = None) -> bool:
    """
    Whether ``path`` is a logical alias rather than a filesystem path.

    Paths starting with the reserved ``~`` marker are always aliases; other
    paths are aliases when a mapping with a non-empty literal prefix
    matches them. Explicitly relative (``./``, ``../``) and absolute paths
    never are.
    """
    if is_relative_or_absolute(path):
        return False
    if path.startswith(ALIAS_MARKER):
        return True
    if table is None:
        return False
    match = match_mapping(path, table.mappings)
    return match is not None and bool(match[0].prefix)


def resolve_components_path(cwd: Path, components_path: str) -> Path:
    """
    Resolve the configured components path to an absolute directory.

    Plain paths bypass the path mapping and are taken relative to ``cwd``.
    Aliases go through the project's path mapping. A ``~/`` alias in a
    project without any path mapping is taken relative to ``cwd`` with the
    marker stripped. A path mapping that cannot be loaded only fails
    ``~`` paths; any other path is then taken as a plain path.

    Raises
    ------
    UnresolvableAliasError
        If a ``~`` path meets an unloadable path mapping, or an alias has
        no mapping entry.
    """
    cwd = cwd.resolve()
    if is_relative_or_absolute(components_path):
        return (cwd / components_path).resolve()

    try:
        table = load_path_mappings(cwd)
    except UnresolvableAliasError:
        if components_path.startswith(ALIAS_MARKER):
            raise
        return (cwd / components_path).resolve()

    if not is_alias(components_path, table):
        return (cwd / components_path).resolve()

    if table is None or not table.mappings:
        return (cwd / components_path[len(ALIAS_MARKER):].lstrip("/")).resolve()

    return resolve_alias(components_path, table)


def resolve_config_paths(cwd: Path, config: GeniesConfig) -> ResolvedConfig:
    """Attach the absolute components directory to a configuration."""
    cwd = cwd.resolve()
    return ResolvedConfig(
        config=config,
        cwd=cwd,
        components_dir=resolve_components_path(cwd, config.components_path),
    )
