"""
genies.writer - Component Rendering and File Writing
====================================================

Renders the component template for a finalized ``ScaffoldPlan`` and writes
it to disk.

Template System
---------------
Templates are Jinja2 files in the ``templates/`` package directory, one per
generated extension. Each template receives ``component_name``, the
StartCase component identifier.

Writes are whole-file: an existing file is fully replaced, never appended
to or patched. A write is not atomic; a crash mid-write may leave a
truncated file, but a failed write is never reported as success.

Usage Example
-------------
>>> from genies.writer import render_component
>>> "export default function MyButton" in render_component("MyButton", "tsx")
True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from genies.exceptions import ScaffoldIOError
from genies.models import FileExtension


if TYPE_CHECKING:
    from pathlib import Path

    from genies.models import ScaffoldPlan


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Template per generated file extension
TEMPLATE_MAPPINGS: dict[FileExtension, str] = {
    FileExtension.TSX: "component.tsx.j2",
    FileExtension.TS: "component.ts.j2",
    FileExtension.JSX: "component.jsx.j2",
    FileExtension.JS: "component.jsx.j2",
}


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for component templates.

    Autoescaping is disabled because the output is source code, not HTML.
    """
    return Environment(
        loader=PackageLoader("genies", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_component(
    symbol_name: str,
    extension: str,
    env: Environment | None = None,
) -> str:
    """
    Render the component source for ``symbol_name``.

    Parameters
    ----------
    symbol_name : str
        Component identifier substituted into the template.

    extension : str
        Extension of the generated file; selects the template.

    env : Environment | None
        Environment to render with; a new one is created when omitted.

    Returns
    -------
    str
        The rendered component source.
    """
    env = env or create_jinja_env()
    template = env.get_template(TEMPLATE_MAPPINGS[FileExtension(extension)])
    return template.render(component_name=symbol_name)


# =============================================================================
# File Writing
# =============================================================================

def write_component(plan: ScaffoldPlan, content: str) -> Path:
    """
    Write the rendered component to the plan's file path.

    Parameters
    ----------
    plan : ScaffoldPlan
        A plan with disposition ``create``; its directory must exist.

    content : str
        Rendered component source.

    Returns
    -------
    Path
        Absolute path of the written file.

    Raises
    ------
    ScaffoldIOError
        If the file cannot be written (permissions, full disk, directory
        removed in the meantime).
    """
    path = plan.file_path
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ScaffoldIOError(path, e) from e
    return path
