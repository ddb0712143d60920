"""
genies.exceptions - Error Types
===============================

All errors raised by the scaffolding engine derive from ``GeniesError``.
They are raised from library code and converted into a user-facing message
plus a non-zero exit code at the command boundary (see
``genies.logger.handle_error``).

Declined prompts are not errors; they end as ``skip`` or ``abort``
dispositions instead.
"""

from __future__ import annotations

from pathlib import Path


class GeniesError(Exception):
    """Base exception for genies errors."""


class ConfigValidationError(GeniesError):
    """A configuration source was found but is unparseable or schema-invalid."""

    def __init__(self, source: Path, details: str) -> None:
        self.source = source
        self.details = details
        super().__init__(f"Invalid configuration found in {source}:\n{details}")


class MissingConfigurationError(GeniesError):
    """No configuration exists where one is required."""

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd
        super().__init__(
            f"Configuration is missing in {cwd}. "
            "Please run 'genies init' to create a genies config file."
        )


class UnresolvableAliasError(GeniesError):
    """A logical alias could not be resolved through the path mapping."""


class ScaffoldIOError(GeniesError, OSError):
    """Directory creation or file write failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause.strerror or cause}")
