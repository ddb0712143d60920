"""
Tests for genies.paths
======================

This module contains tests for tsconfig/jsconfig loading, alias matching
and components path resolution.

Test Organization
-----------------
- TestParseJsonc: Tests for JSON with comments
- TestMatchMapping: Tests for pattern selection
- TestLoadPathMappings: Tests for reading the compiler path mapping
- TestResolveComponentsPath: Tests for resolving the configured path
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from genies.exceptions import UnresolvableAliasError
from genies.models import GeniesConfig
from genies.paths import (
    PathMapping,
    PathMappingTable,
    is_alias,
    load_path_mappings,
    match_mapping,
    parse_jsonc,
    resolve_alias,
    resolve_components_path,
    resolve_config_paths,
)


def tsconfig(paths: dict | None = None, **options: object) -> dict:
    compiler_options = dict(options)
    if paths is not None:
        compiler_options["paths"] = paths
    return {"compilerOptions": compiler_options}


# =============================================================================
# JSONC Tests
# =============================================================================

class TestParseJsonc:
    """Tests for tsconfig-flavoured JSON."""

    def test_comments_and_trailing_commas(self) -> None:
        text = (
            "{\n"
            "  // line comment\n"
            '  "compilerOptions": {\n'
            "    /* block\n       comment */\n"
            '    "paths": {"@/*": ["./src/*"],},\n'
            "  },\n"
            "}\n"
        )

        assert parse_jsonc(text) == {"compilerOptions": {"paths": {"@/*": ["./src/*"]}}}

    def test_comment_markers_inside_strings(self) -> None:
        """Test that patterns such as "@/*" are not treated as comments."""
        text = '{"a": "http://example.com", "b": "@/*", "c": "*/"}'

        assert parse_jsonc(text) == {"a": "http://example.com", "b": "@/*", "c": "*/"}


# =============================================================================
# Matching Tests
# =============================================================================

class TestMatchMapping:
    """Tests for choosing the mapping that applies to a specifier."""

    GENERAL = PathMapping("@/*", ("./src/*",))
    SPECIFIC = PathMapping("@/components/*", ("./lib/ui/*",))

    @pytest.mark.parametrize(
        "mappings",
        [(GENERAL, SPECIFIC), (SPECIFIC, GENERAL)],
        ids=["general-first", "specific-first"],
    )
    def test_longest_prefix_independent_of_order(
        self, mappings: tuple[PathMapping, ...]
    ) -> None:
        """Test that the longest literal prefix wins in any order."""
        mapping, captured = match_mapping("@/components/button", mappings)

        assert mapping == self.SPECIFIC
        assert captured == "button"

    def test_exact_beats_wildcard(self) -> None:
        exact = PathMapping("@/components", ("./shared/components",))

        mapping, captured = match_mapping("@/components", (self.GENERAL, exact))

        assert mapping == exact
        assert captured == ""

    def test_suffix(self) -> None:
        """Test patterns with text after the wildcard."""
        mapping = PathMapping("#*/index", ("./src/*",))

        assert mapping.capture("#ui/index") == "ui"
        assert mapping.capture("#ui/other") is None

    def test_no_match(self) -> None:
        assert match_mapping("~/components", (self.GENERAL,)) is None

    def test_first_existing_target_wins(self, tmp_path: Path) -> None:
        """Test fallback targets."""
        (tmp_path / "b" / "components").mkdir(parents=True)
        table = PathMappingTable(
            source=tmp_path / "tsconfig.json",
            base_dir=tmp_path,
            mappings=(PathMapping("~/*", ("./a/*", "./b/*")),),
        )

        assert resolve_alias("~/components", table) == (tmp_path / "b" / "components").resolve()

    def test_first_target_when_none_exist(self, tmp_path: Path) -> None:
        table = PathMappingTable(
            source=tmp_path / "tsconfig.json",
            base_dir=tmp_path,
            mappings=(PathMapping("~/*", ("./a/*", "./b/*")),),
        )

        assert resolve_alias("~/components", table) == (tmp_path / "a" / "components").resolve()

    def test_unmatched_alias(self, tmp_path: Path) -> None:
        table = PathMappingTable(
            source=tmp_path / "tsconfig.json",
            base_dir=tmp_path,
            mappings=(self.GENERAL,),
        )

        with pytest.raises(UnresolvableAliasError, match="tsconfig.json"):
            resolve_alias("~/components", table)


# =============================================================================
# Loading Tests
# =============================================================================

class TestLoadPathMappings:
    """Tests for reading tsconfig.json and jsconfig.json."""

    def test_no_config(self, project_dir: Path) -> None:
        assert load_path_mappings(project_dir) is None

    def test_tsconfig(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", tsconfig({"@/*": ["./src/*"]}))

        table = load_path_mappings(project_dir)

        assert table.base_dir == project_dir
        assert table.mappings == (PathMapping("@/*", ("./src/*",)),)

    def test_jsconfig(self, project_dir: Path, write_file: Callable) -> None:
        """Test that JavaScript projects use jsconfig.json."""
        write_file("jsconfig.json", tsconfig({"~/*": ["./*"]}))

        assert load_path_mappings(project_dir).source.name == "jsconfig.json"

    def test_base_url(self, project_dir: Path, write_file: Callable) -> None:
        """Test that targets resolve against baseUrl."""
        write_file("tsconfig.json", tsconfig({"~/*": ["./*"]}, baseUrl="src"))

        table = load_path_mappings(project_dir)

        assert resolve_alias("~/components", table) == project_dir / "src" / "components"

    def test_extends(self, project_dir: Path, write_file: Callable) -> None:
        """Test that inherited paths resolve against the declaring file."""
        write_file("config/tsconfig.base.json", tsconfig({"@/*": ["../src/*"]}))
        write_file("tsconfig.json", {"extends": "./config/tsconfig.base"})

        table = load_path_mappings(project_dir)

        assert resolve_alias("@/components", table) == project_dir / "src" / "components"

    def test_own_paths_override_extended(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.base.json", tsconfig({"@/*": ["./lib/*"]}))
        write_file(
            "tsconfig.json",
            {"extends": "./tsconfig.base.json", **tsconfig({"@/*": ["./src/*"]})},
        )

        table = load_path_mappings(project_dir)

        assert resolve_alias("@/components", table) == project_dir / "src" / "components"

    def test_circular_extends(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", {"extends": "./tsconfig.other.json"})
        write_file("tsconfig.other.json", {"extends": "./tsconfig.json"})

        with pytest.raises(UnresolvableAliasError, match="Circular"):
            load_path_mappings(project_dir)

    def test_invalid_json(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", "{ compilerOptions: ")

        with pytest.raises(UnresolvableAliasError):
            load_path_mappings(project_dir)

    def test_invalid_paths(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", tsconfig({"@/*": [1]}))

        with pytest.raises(UnresolvableAliasError):
            load_path_mappings(project_dir)


# =============================================================================
# Resolution Tests
# =============================================================================

class TestResolveComponentsPath:
    """Tests for resolving the configured components path."""

    @pytest.mark.parametrize("path", ["./src/components", "src/components"])
    def test_plain_path(self, project_dir: Path, path: str) -> None:
        """Test that filesystem paths are relative to the project root."""
        assert resolve_components_path(project_dir, path) == project_dir / "src" / "components"

    def test_absolute_path(self, project_dir: Path, tmp_path: Path) -> None:
        target = (tmp_path / "shared").resolve()

        assert resolve_components_path(project_dir, str(target)) == target

    def test_marker_without_tsconfig(self, project_dir: Path) -> None:
        """Test the ~ fallback for projects without a path mapping."""
        assert resolve_components_path(project_dir, "~/components") == project_dir / "components"

    def test_marker_without_paths(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", tsconfig(strict=True))

        assert resolve_components_path(project_dir, "~/components") == project_dir / "components"

    def test_mapped_alias(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", tsconfig({"@/*": ["./src/*"]}))

        resolved = resolve_components_path(project_dir, "@/components")

        assert resolved == project_dir / "src" / "components"

    def test_unmatched_marker(self, project_dir: Path, write_file: Callable) -> None:
        """Test that an alias with no matching mapping is an error."""
        write_file("tsconfig.json", tsconfig({"@/*": ["./src/*"]}))

        with pytest.raises(UnresolvableAliasError):
            resolve_components_path(project_dir, "~/components")

    def test_plain_path_ignores_broken_tsconfig(
        self, project_dir: Path, write_file: Callable
    ) -> None:
        """Test that a plain path does not depend on a readable tsconfig."""
        write_file("tsconfig.json", "{ not json")

        resolved = resolve_components_path(project_dir, "src/components")

        assert resolved == project_dir / "src" / "components"

    def test_marker_with_broken_tsconfig(
        self, project_dir: Path, write_file: Callable
    ) -> None:
        write_file("tsconfig.json", "{ not json")

        with pytest.raises(UnresolvableAliasError):
            resolve_components_path(project_dir, "~/components")

    def test_is_alias(self, project_dir: Path, write_file: Callable) -> None:
        write_file("tsconfig.json", tsconfig({"@/*": ["./src/*"]}))
        table = load_path_mappings(project_dir)

        assert is_alias("~/components")
        assert is_alias("@/components", table)
        assert not is_alias("@/components")
        assert not is_alias("./components", table)
        assert not is_alias("src/components", table)

    def test_resolve_config_paths(self, project_dir: Path) -> None:
        resolved = resolve_config_paths(project_dir, GeniesConfig(aliases=["ui"]))

        assert resolved.cwd == project_dir
        assert resolved.components_dir == project_dir / "components"
        assert resolved.alias_dirs == {"ui": project_dir / "components" / "ui"}
