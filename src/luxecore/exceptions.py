"""Unified exception hierarchy for LuxeCore.

All errors raised by the permission engine inherit from LuxeCoreError and
carry a stable ``code`` string.

Usage:
    from luxecore.exceptions import (
        LuxeCoreError,
        InvalidCatalogShape,
        StaleReferenceError,
    )

Integrations may define thin subclasses for their own failures:
    class RoleApiError(PersistenceError):
        code = "ROLE_API_ERROR"
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "LuxeCoreError",
    "ConfigurationError",
    "CatalogError",
    "InvalidCatalogShape",
    "StaleReferenceError",
    "PersistenceError",
]


# ---- Exception Hierarchy ----------------------------------------------------


class LuxeCoreError(Exception):
    """Base exception for LuxeCore.

    Attributes:
        code: Stable error code string (e.g. "INVALID_CATALOG_SHAPE").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(LuxeCoreError):
    """Invalid or missing configuration.

    Raised by ``load_shared_config_from_env`` for environment values the
    config models reject.
    """

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class CatalogError(LuxeCoreError):
    """Permission catalog could not be used."""

    code: str = "CATALOG_ERROR"
    message: str = "Permission catalog error"


class InvalidCatalogShape(CatalogError):
    """Catalog is not a well-formed tree.

    Raised at load time for cycles, duplicate sibling names, empty names,
    names containing the path separator, or depth beyond the configured
    limit. The editor must not open on such a catalog.
    """

    code: str = "INVALID_CATALOG_SHAPE"
    message: str = "Permission catalog is not a well-formed tree"


class StaleReferenceError(LuxeCoreError):
    """A path is not present in the current catalog.

    Only the strict ``PermissionTree.node`` lookup raises this. Every
    public selection and lookup operation treats stale paths as no-ops.
    """

    code: str = "STALE_REFERENCE"
    message: str = "Permission path is not in the current catalog"


class PersistenceError(LuxeCoreError):
    """Store failed to load or save role permissions."""

    code: str = "PERSISTENCE_ERROR"
    message: str = "Permission store operation failed"

