"""Abstract permission store and an in-memory implementation.

The editor talks to the source of truth only through ``PermissionStore``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from .exceptions import PersistenceError


class PermissionStore(ABC):
    """Remote source of truth for the catalog and role grants.

    Transport, auth, retries and storage format belong to implementations.
    Payload shapes are loose on purpose; ``luxecore.permissions.catalog``
    normalizes them.
    """

    @abstractmethod
    async def load_catalog(self) -> Any:
        """Return the catalog: a list of root nodes, or a dict wrapping it."""
        raise NotImplementedError

    @abstractmethod
    async def load_role(self, role_id: str) -> Any:
        """Return the role with its current ``permissions``."""
        raise NotImplementedError

    @abstractmethod
    async def save_role_permissions(self, role_id: str, permissions: List[str]) -> Any:
        """Replace the role's grants with ``permissions`` and return the updated role."""
        raise NotImplementedError


class InMemoryPermissionStore(PermissionStore):
    """Dict-backed store for local development and tests."""

    def __init__(self, catalog: Any = None, roles: Any = None):
        self._catalog = catalog if catalog is not None else []
        self._roles = {str(k): dict(v) for k, v in (roles or {}).items()}

    @property
    def roles(self):
        return self._roles

    async def load_catalog(self) -> Any:
        return self._catalog

    async def load_role(self, role_id: str) -> Any:
        try:
            return dict(self._roles[role_id])
        except KeyError:
            raise PersistenceError(f"Unknown role: {role_id}", role_id=role_id) from None

    async def save_role_permissions(self, role_id: str, permissions: List[str]) -> Any:
        role = self._roles.setdefault(role_id, {"id": role_id, "name": role_id})
        role["permissions"] = list(permissions)
        return {"role": dict(role)}


__all__ = ["PermissionStore", "InMemoryPermissionStore"]
