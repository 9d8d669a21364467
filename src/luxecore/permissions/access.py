"""Access-check helpers over saved grant lists.

Provides runtime functions that answer whether a role's saved permission
paths allow a capability. A granted path covers its whole subtree, so
``"Bookings"`` allows ``"Bookings.View Bookings"`` and anything deeper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from .paths import ancestors_of, leaf_name
from .selection import SelectionSet, normalize_grants
from .tree import PermissionTree

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_SUPERADMIN_ROLE = "superadmin"


def _grant_set(granted: Iterable[str] | None) -> frozenset[str] | None:
    if granted is None or isinstance(granted, (str, bytes)):
        return None
    return frozenset(granted)


def has_permission(granted: Iterable[str] | None, required: str | None) -> bool:
    """Check if a grant list allows ``required``.

    Checks in order:
    1. Empty ``required`` — nothing to check, allowed.
    2. Exact grant of ``required``.
    3. Grant of any ancestor of ``required`` (a granted node covers its subtree).

    A missing grant list, or a bare string in place of a list, never allows.

    Example::

        has_permission(["Bookings"], "Bookings.View Bookings")        # True
        has_permission(["Bookings.View Bookings"], "Bookings")        # False
        has_permission(["Guests.View Guests"], "Guests.View Guests")  # True
    """
    perm_set = _grant_set(granted)
    if perm_set is None:
        return False
    if not required:
        return True
    if required in perm_set:
        return True
    return any(ancestor in perm_set for ancestor in ancestors_of(required))


def has_any_permission(granted: Iterable[str] | None, required: Sequence[str] | None) -> bool:
    """True if any of ``required`` is allowed. An empty requirement allows."""
    if not required:
        return True
    perm_set = _grant_set(granted)
    return any(has_permission(perm_set, perm) for perm in required)


def has_all_permissions(granted: Iterable[str] | None, required: Sequence[str] | None) -> bool:
    """True if every one of ``required`` is allowed. An empty requirement allows."""
    if not required:
        return True
    perm_set = _grant_set(granted)
    return all(has_permission(perm_set, perm) for perm in required)


def filter_by_permission(
    items: Iterable[_T],
    granted: Iterable[str] | None,
    key: str = "permission",
) -> list[_T]:
    """Keep items whose required permission is absent or allowed.

    Items may be mappings (``item[key]``) or objects (``item.<key>``).
    Typical use is trimming navigation entries to what a role can open.
    """
    perm_set = _grant_set(granted)
    kept: list[_T] = []
    for item in items:
        if isinstance(item, Mapping):
            required = item.get(key)
        else:
            required = getattr(item, key, None)
        if not required or has_permission(perm_set, required):
            kept.append(item)
    return kept


def expand_grants(granted: Iterable[str], tree: PermissionTree) -> tuple[str, ...]:
    """Expand grants with every catalog path they imply.

    Returns catalog paths in catalog order, followed by grants the catalog
    does not know (sorted), deduplicated.

    Example::

        expand_grants(["Guests"], tree)
        # ('Guests', 'Guests.View Guests', 'Guests.Add Guests', ...)
    """
    expanded: set[str] = set()
    for path in granted:
        expanded.add(path)
        expanded.update(tree.descendants_of(path))
    return tuple(SelectionSet(expanded).to_list(tree))


@dataclass(frozen=True)
class ModuleCapabilities:
    """CRUD capabilities of one module for a grant list."""

    can_view: bool = False
    can_add: bool = False
    can_edit: bool = False
    can_delete: bool = False


_VERBS = {"can_view": "View", "can_add": "Add", "can_edit": "Edit", "can_delete": "Delete"}


def _action_path(module: str, verb: str, tree: PermissionTree | None) -> str:
    if tree is not None:
        for child in sorted(tree.direct_children_of(module)):
            if leaf_name(child).split(" ", 1)[0].casefold() == verb.casefold():
                return child
    return f"{module}.{verb} {module}"


def module_capabilities(
    granted: Iterable[str] | None,
    module: str,
    tree: PermissionTree | None = None,
) -> ModuleCapabilities:
    """Derive view/add/edit/delete rights for ``module``.

    Without a tree, actions follow the ``"{Module}.{Verb} {Module}"``
    convention. With a tree, the module's direct child whose name starts
    with the verb is used, which also covers singular names such as
    ``"Users.Add User"``. The module root implies every action.
    """
    perm_set = _grant_set(granted)
    return ModuleCapabilities(
        **{
            field: has_permission(perm_set, _action_path(module, verb, tree))
            for field, verb in _VERBS.items()
        }
    )


def role_permissions(
    role: Any,
    tree: PermissionTree,
    superadmin_role: str = DEFAULT_SUPERADMIN_ROLE,
) -> list[str]:
    """Effective grant list of a role.

    The superadmin role holds every catalog path; other roles hold their
    normalized saved grants. ``role`` may be a ``Role``, a mapping, or an
    object with ``name`` and ``permissions``.
    """
    if isinstance(role, Mapping):
        name, permissions = role.get("name"), role.get("permissions")
    else:
        name, permissions = getattr(role, "name", None), getattr(role, "permissions", None)

    if name == superadmin_role:
        logger.debug("Role %r resolves to the full catalog", name)
        return list(tree.paths)
    return normalize_grants(permissions)


__all__ = [
    "DEFAULT_SUPERADMIN_ROLE",
    "ModuleCapabilities",
    "expand_grants",
    "filter_by_permission",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "module_capabilities",
    "role_permissions",
]
