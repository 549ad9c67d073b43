"""Error taxonomy shared by the catalog repositories and services."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for every error raised by the catalog packages."""


class StorageError(CatalogError):
    """Raised when a query fails to execute or a result row cannot be decoded.

    The driver exception, if any, is kept as ``__cause__``.
    """


class SeedError(CatalogError):
    """Raised when the one-time repository initialization fails.

    The same instance is returned to every caller of ``init`` on the
    repository that failed; a fresh repository is needed to retry.
    """


class InvalidFilter(CatalogError, ValueError):
    """Raised when a list filter asks for something the repository cannot do."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
