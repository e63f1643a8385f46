"""Exceptions that abort a generation run."""

from __future__ import annotations


class LlmDocsError(RuntimeError):
    """Base class for fatal pipeline errors."""


class NavigationError(LlmDocsError):
    """Raised when the navigation description cannot be loaded or parsed."""


class BuildDirectoryError(LlmDocsError):
    """Raised when the rendered site directory is missing."""


class ArchiveError(LlmDocsError):
    """Raised when the Markdown archive cannot be written."""


__all__ = [
    "ArchiveError",
    "BuildDirectoryError",
    "LlmDocsError",
    "NavigationError",
]
