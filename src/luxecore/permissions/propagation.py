"""Cascading grant/revoke propagation.

``toggle(path, selection, tree)`` is a pure function: it never mutates its
inputs and returns a new ``SelectionSet``.

Rules:

- **Deselect** ``P``: drop ``P``, every descendant of ``P`` and every
  ancestor of ``P``. A selected ancestor asserts its whole subtree is
  granted, which stops being true once anything below it is revoked.
- **Select** ``P``: add ``P`` and every descendant of ``P``. Then walk up:
  an ancestor is promoted only when all of its direct children are
  selected, and the walk stops at the first ancestor that is not promoted.
- A path the catalog does not contain leaves the selection unchanged.

Each toggle touches O(depth + |descendants|) paths.
"""

from __future__ import annotations

import logging

from .selection import SelectionSet
from .tree import PermissionTree

logger = logging.getLogger(__name__)


def select_path(path: str, selection: SelectionSet, tree: PermissionTree) -> SelectionSet:
    """Grant ``path`` with its subtree, then auto-promote complete ancestors."""
    if path not in tree:
        logger.debug("Ignoring select of stale permission path %r", path)
        return selection

    granted = set(selection.paths)
    granted.add(path)
    granted.update(tree.descendants_of(path))

    parent = tree.parent_of(path)
    while parent is not None:
        if not tree.direct_children_of(parent) <= granted:
            break
        granted.add(parent)
        parent = tree.parent_of(parent)

    return SelectionSet(granted)


def deselect_path(path: str, selection: SelectionSet, tree: PermissionTree) -> SelectionSet:
    """Revoke ``path`` with its subtree and every ancestor above it."""
    if path not in tree:
        logger.debug("Ignoring deselect of stale permission path %r", path)
        return selection

    revoked = tree.subtree_of(path).union(tree.ancestors_of(path))
    return SelectionSet(selection.paths - revoked)


def toggle(path: str, selection: SelectionSet, tree: PermissionTree) -> SelectionSet:
    """Flip ``path``: deselect it if selected, select it otherwise.

    Example::

        selection = toggle("bookings.create", SelectionSet(), tree)
        # {"bookings.create"}
        selection = toggle("bookings.delete", selection, tree)
        # {"bookings", "bookings.create", "bookings.delete"}  (auto-promoted)
        selection = toggle("bookings.delete", selection, tree)
        # {"bookings.create"}  (parent demoted)
    """
    if selection.is_selected(path):
        return deselect_path(path, selection, tree)
    return select_path(path, selection, tree)


__all__ = [
    "deselect_path",
    "select_path",
    "toggle",
]
