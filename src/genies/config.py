"""
genies.config - Configuration Discovery, Loading and Writing
============================================================

A project's genies configuration lives in one of several well-known files.
The loader checks them in a fixed order relative to the working directory
and the first existing match wins; sources are never merged.

Search Order
------------
1. ``package.json`` (``"genies"`` key)
2. ``.geniesrc`` (YAML or JSON), ``.geniesrc.json``, ``.geniesrc.yaml``,
   ``.geniesrc.yml``, ``.geniesrc.toml``
3. ``.genies.mjs``, ``.genies.cjs``, ``.genies.js``, ``.genies.ts``
4. ``genies.json``, ``genies.config.json``, ``genies.config.yaml``,
   ``genies.config.yml``, ``genies.config.toml``
5. ``genies.config.ts``, ``genies.config.mts``, ``genies.config.mjs``,
   ``genies.config.cjs``, ``genies.config.js``

Script modules are not executed. Their ``export default {...}`` (or
``module.exports = {...}``) object literal is read as a YAML flow mapping
once its bare keys are quoted and its strings double-quoted. JSON, unquoted
keys, single quotes and trailing commas are all accepted.

A source that exists but cannot be parsed or does not satisfy the schema
raises ``ConfigValidationError``; it is never silently replaced by
defaults.

Usage Example
-------------
>>> from pathlib import Path
>>> from genies.config import load_config
>>> config = load_config(Path("."))
>>> config.extension if config else None
'tsx'
"""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from genies.exceptions import ConfigValidationError, ScaffoldIOError
from genies.models import GeniesConfig
from genies.paths import strip_comments


if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


# =============================================================================
# Module-Level Configuration
# =============================================================================

MODULE_NAME = "genies"

PACKAGE_JSON = "package.json"

SEARCH_PLACES: tuple[str, ...] = (
    PACKAGE_JSON,
    f".{MODULE_NAME}rc",
    f".{MODULE_NAME}rc.json",
    f".{MODULE_NAME}rc.yaml",
    f".{MODULE_NAME}rc.yml",
    f".{MODULE_NAME}rc.toml",
    f".{MODULE_NAME}.mjs",
    f".{MODULE_NAME}.cjs",
    f".{MODULE_NAME}.js",
    f".{MODULE_NAME}.ts",
    f"{MODULE_NAME}.json",
    f"{MODULE_NAME}.config.json",
    f"{MODULE_NAME}.config.yaml",
    f"{MODULE_NAME}.config.yml",
    f"{MODULE_NAME}.config.toml",
    f"{MODULE_NAME}.config.ts",
    f"{MODULE_NAME}.config.mts",
    f"{MODULE_NAME}.config.mjs",
    f"{MODULE_NAME}.config.cjs",
    f"{MODULE_NAME}.config.js",
)

_EXPORT_RE = re.compile(
    r"(?:export\s+default|module\.exports\s*=)\s*(?:\w+\s*\(\s*)?(\{.*\})",
    re.DOTALL,
)

# A double-quoted string, a single-quoted string, or a bare object key
_LITERAL_TOKEN_RE = re.compile(
    r"""
    "(?P<double>(?:[^"\\]|\\.)*)"
    | '(?P<single>(?:[^'\\]|\\.)*)'
    | (?P<key>[A-Za-z_$][\w$]*)\s*:\s*
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE_RE = re.compile(r'\\.|"', re.DOTALL)


# =============================================================================
# Parsers
# =============================================================================

def parse_json(text: str) -> object:
    return json.loads(text)


def parse_yaml(text: str) -> object:
    return yaml.safe_load(text)


def parse_toml(text: str) -> object:
    return tomllib.loads(text)


def _double_quoted(body: str) -> str:
    def escape(match: re.Match[str]) -> str:
        token = match.group()
        if token == "\\'":
            return "'"
        if token == '"':
            return '\\"'
        return token

    return '"' + _ESCAPE_RE.sub(escape, body) + '"'


def normalize_object_literal(literal: str) -> str:
    """
    Rewrite a JS object literal into a YAML flow mapping.

    Bare keys are quoted and every string becomes double-quoted, so keys
    written without a space after the colon (``{style:'camelCase'}``) are
    still separated from their values.

    >>> normalize_object_literal("{style:'camelCase', tsx: true}")
    '{"style": "camelCase", "tsx": true}'
    """

    def replace(match: re.Match[str]) -> str:
        if match.group("key") is not None:
            return f'"{match.group("key")}": '
        body = match.group("double")
        if body is None:
            body = match.group("single")
        return _double_quoted(body)

    return _LITERAL_TOKEN_RE.sub(replace, literal)


def parse_script(text: str) -> object:
    """
    Extract the default-exported object literal of a JS/TS config module.

    Raises
    ------
    ValueError
        If the module has no ``export default {...}`` or
        ``module.exports = {...}`` object.
    """
    match = _EXPORT_RE.search(strip_comments(text))
    if match is None:
        msg = "expected 'export default { ... }' or 'module.exports = { ... }'"
        raise ValueError(msg)
    return yaml.safe_load(normalize_object_literal(match.group(1)))


# Parser per file suffix; the extensionless rc file is YAML (a JSON superset)
PARSERS: dict[str, Callable[[str], object]] = {
    "": parse_yaml,
    ".json": parse_json,
    ".yaml": parse_yaml,
    ".yml": parse_yaml,
    ".toml": parse_toml,
    ".js": parse_script,
    ".mjs": parse_script,
    ".cjs": parse_script,
    ".ts": parse_script,
    ".mts": parse_script,
}


# =============================================================================
# Discovery
# =============================================================================

@dataclass(frozen=True)
class ConfigSource:
    """
    A configuration found on disk, before schema validation.

    Attributes
    ----------
    path : Path
        File the configuration was read from.

    data : object
        Parsed content (expected to be a mapping).

    embedded : bool
        True when the configuration is the ``"genies"`` key of
        ``package.json`` rather than a standalone file.
    """

    path: Path
    data: object
    embedded: bool = False


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigValidationError(path, f"could not be read: {e}") from e


def find_config_source(
    cwd: Path,
    search_places: Sequence[str] = SEARCH_PLACES,
) -> ConfigSource | None:
    """
    Find and parse the first configuration source in ``cwd``.

    Parameters
    ----------
    cwd : Path
        Directory to search (parent directories are not searched).

    search_places : Sequence[str]
        File names to try, in order.

    Returns
    -------
    ConfigSource | None
        The first match, or None when no candidate exists. A
        ``package.json`` without a ``"genies"`` key does not count as a
        match.

    Raises
    ------
    ConfigValidationError
        If the first existing candidate cannot be parsed.
    """
    for place in search_places:
        path = cwd / place
        if not path.is_file():
            continue

        text = _read(path)

        if place == PACKAGE_JSON:
            try:
                manifest = parse_json(text)
            except ValueError as e:
                raise ConfigValidationError(path, f"invalid JSON: {e}") from e
            if isinstance(manifest, dict) and MODULE_NAME in manifest:
                return ConfigSource(path=path, data=manifest[MODULE_NAME], embedded=True)
            continue

        parser = PARSERS.get(path.suffix, parse_yaml)
        try:
            data = parser(text)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigValidationError(path, f"could not be parsed: {e}") from e

        return ConfigSource(path=path, data=data)

    return None


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as one ``- field: message`` line each."""
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "(root)"
        lines.append(f"  - {location}: {err['msg']}")
    return "\n".join(lines)


def validate_source(source: ConfigSource) -> GeniesConfig:
    """
    Validate a parsed source against the configuration schema.

    Raises
    ------
    ConfigValidationError
        If the content is not a mapping or fails validation.
    """
    if not isinstance(source.data, dict):
        raise ConfigValidationError(
            source.path,
            f"  - (root): expected an object, got {type(source.data).__name__}",
        )

    try:
        return GeniesConfig.model_validate(source.data, by_alias=True, by_name=False)
    except ValidationError as e:
        raise ConfigValidationError(source.path, format_validation_error(e)) from e


def load_config(
    cwd: Path,
    search_places: Sequence[str] = SEARCH_PLACES,
) -> GeniesConfig | None:
    """
    Load the project's configuration.

    Parameters
    ----------
    cwd : Path
        Project root.

    search_places : Sequence[str]
        File names to try, in order.

    Returns
    -------
    GeniesConfig | None
        The validated configuration, or None when no source exists.

    Raises
    ------
    ConfigValidationError
        If a source exists but is invalid.
    """
    source = find_config_source(cwd, search_places)
    if source is None:
        return None
    return validate_source(source)


# =============================================================================
# Writing
# =============================================================================

def config_file_name(tsx: bool) -> str:
    """
    Name of the configuration file written by ``genies init``.

    >>> config_file_name(True)
    'genies.config.ts'
    >>> config_file_name(False)
    'genies.config.mjs'
    """
    return f"{MODULE_NAME}.config.{'ts' if tsx else 'mjs'}"


def render_config_module(config: GeniesConfig) -> str:
    """Render the configuration as an ES module with a default export."""
    return f"export default {json.dumps(config.to_file_dict(), indent=2)}\n"


def write_config(
    cwd: Path,
    config: GeniesConfig,
    previous: ConfigSource | None = None,
) -> Path:
    """
    Persist a configuration, replacing any previous one wholesale.

    Parameters
    ----------
    cwd : Path
        Project root.

    config : GeniesConfig
        Configuration to write.

    previous : ConfigSource | None
        Where the current configuration was loaded from, if anywhere. An
        embedded ``package.json`` configuration is updated in place; a
        previous standalone file is removed after the new file is written
        so that it cannot shadow it in the search order.

    Returns
    -------
    Path
        The file that now holds the configuration.

    Raises
    ------
    ScaffoldIOError
        If writing fails.
    """
    if previous is not None and previous.embedded:
        target = previous.path
        try:
            manifest = json.loads(target.read_text(encoding="utf-8"))
            manifest[MODULE_NAME] = config.to_file_dict()
            target.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ScaffoldIOError(target, e) from e
        return target

    target = cwd / config_file_name(config.tsx)
    try:
        target.write_text(render_config_module(config), encoding="utf-8")
        if previous is not None and previous.path.resolve() != target.resolve():
            previous.path.unlink(missing_ok=True)
    except OSError as e:
        raise ScaffoldIOError(target, e) from e

    return target
