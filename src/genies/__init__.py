"""
genies - React Component Scaffolding
====================================

A CLI tool that adds React components to your apps. It reads a small
project configuration, resolves the components directory through the
project's ``tsconfig.json`` path aliases and writes one component file per
requested name.

Quick Start
-----------
```bash
# Install genies
pip install genies

# Create the configuration (genies.config.ts or genies.config.mjs)
genies init

# Add components
genies add button "user card"
```

Example
-------
>>> from pathlib import Path
>>> from genies import load_config, resolve_config_paths
>>> config = load_config(Path("."))
>>> resolved = resolve_config_paths(Path(".").resolve(), config)

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface
- ``config``: Configuration discovery, loading and writing
- ``paths``: tsconfig/jsconfig alias resolution
- ``naming``: File and symbol name transformation
- ``planner``: Per-component scaffold decisions
- ``writer``: Jinja2 rendering and file writing
- ``initializer``: The ``genies init`` flow
- ``models``: Pydantic models for configuration
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================
# Entry points for using genies as a library (as opposed to the CLI)

from genies.config import load_config, write_config
from genies.models import GeniesConfig, NamingStyle, ScaffoldRequest
from genies.naming import to_file_name, to_symbol_name
from genies.paths import resolve_config_paths
from genies.planner import run_batch


__all__ = [
    # Configuration models
    "GeniesConfig",
    "NamingStyle",
    "ScaffoldRequest",
    # Version info
    "__version__",
    # Core functions
    "load_config",
    "resolve_config_paths",
    "run_batch",
    "to_file_name",
    "to_symbol_name",
    "write_config",
]
