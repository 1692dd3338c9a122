"""Package subsystem exceptions.

Provides custom exceptions for template package resolution and download to
enable proper error handling and user-friendly error messages.
"""
from __future__ import annotations

from lazybones.core.exceptions import LazybonesError


class PackageError(LazybonesError):
    """Base exception for template package errors."""


class PackageNotFoundError(PackageError):
    """Raised when no source hosts a package, or the requested version cannot be downloaded."""

    def __init__(self, name: str, version: str | None = None, message: str | None = None) -> None:
        if message is None:
            if version:
                message = f"Cannot find version {version} of template '{name}'"
            else:
                message = f"Cannot find a template named '{name}'"
        super().__init__(message, context={"name": name, "version": version})
        self.name = name
        self.version = version


class NoVersionsPublishedError(PackageError):
    """Raised when a source knows a package but has no published version of it."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"No version of '{name}' has been published",
            context={"name": name},
        )
        self.name = name


__all__ = [
    "PackageError",
    "PackageNotFoundError",
    "NoVersionsPublishedError",
]
