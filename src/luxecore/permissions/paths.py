"""Dotted permission-path helpers.

A permission path is the dot-joined sequence of node names from a catalog
root down to the node, e.g. ``"Bookings.View Bookings"``. These helpers
work on plain strings and flat path universes, so they stay usable when a
caller only holds the list of paths and not the tree itself.
"""

from __future__ import annotations

from typing import Iterable

SEPARATOR = "."


def join_path(*segments: str) -> str:
    """Join node names into a permission path, skipping empty segments."""
    return SEPARATOR.join(s for s in segments if s)


def parent_of(path: str) -> str | None:
    """Return the path with its last segment removed, or None for a root."""
    head, sep, _ = path.rpartition(SEPARATOR)
    return head if sep else None


def depth_of(path: str) -> int:
    """Zero-based depth: roots are 0, their children 1, and so on."""
    return path.count(SEPARATOR)


def leaf_name(path: str) -> str:
    """The node's own name (the last segment)."""
    return path.rpartition(SEPARATOR)[2]


def ancestors_of(path: str) -> tuple[str, ...]:
    """All ancestors of ``path``, nearest parent first, root last."""
    ancestors: list[str] = []
    parent = parent_of(path)
    while parent is not None:
        ancestors.append(parent)
        parent = parent_of(parent)
    return tuple(ancestors)


def is_descendant(path: str, ancestor: str) -> bool:
    """True if ``path`` lies strictly below ``ancestor``."""
    return path.startswith(ancestor + SEPARATOR)


def descendants_in(universe: Iterable[str], path: str) -> tuple[str, ...]:
    """Paths of ``universe`` strictly below ``path``, in universe order.

    Matches on the ``path + "."`` prefix, so ``"Tasks"`` never captures
    ``"TasksArchive.View"``.
    """
    prefix = path + SEPARATOR
    return tuple(p for p in universe if p.startswith(prefix))


def direct_children_in(universe: Iterable[str], path: str) -> tuple[str, ...]:
    """Paths of ``universe`` exactly one level below ``path``."""
    child_depth = depth_of(path) + 1
    return tuple(p for p in descendants_in(universe, path) if depth_of(p) == child_depth)


__all__ = [
    "SEPARATOR",
    "ancestors_of",
    "depth_of",
    "descendants_in",
    "direct_children_in",
    "is_descendant",
    "join_path",
    "leaf_name",
    "parent_of",
]
