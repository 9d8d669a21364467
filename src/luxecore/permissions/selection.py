"""Selection state for one role-editing session.

``SelectionSet`` is an immutable set of granted permission paths. It
answers membership and partial-state queries; every change produces a new
instance. Only ``select_all`` and ``deselect_all`` replace the set without
going through ``propagation.toggle``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, Mapping

from .tree import PermissionTree


class CheckboxState(str, Enum):
    """Derived display state of one catalog node."""

    CHECKED = "checked"
    INDETERMINATE = "indeterminate"
    UNCHECKED = "unchecked"


def normalize_grants(grants: Iterable[Any] | None) -> list[str]:
    """Normalize raw grant identifiers into permission paths.

    Each grant may be a string (bare name or dotted path), a mapping with a
    ``name`` (or ``path``) key, or an object with a ``name`` attribute.
    Whitespace is stripped, empties are dropped and duplicates removed,
    keeping first-seen order.
    """
    normalized: list[str] = []
    seen: set[str] = set()
    for grant in grants or ():
        if isinstance(grant, str):
            value = grant
        elif isinstance(grant, Mapping):
            value = grant.get("name") or grant.get("path") or ""
        else:
            value = getattr(grant, "name", None) or ""
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


class SelectionSet:
    """Immutable set of granted permission paths.

    Example::

        selection = SelectionSet(["bookings.create"])
        selection.is_selected("bookings.create")            # True
        selection.is_partially_selected("bookings", tree)   # True
        selection.select_all(tree.paths)                    # every path
    """

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: frozenset[str] = frozenset(paths)

    @classmethod
    def from_grants(cls, grants: Iterable[Any] | None) -> SelectionSet:
        """Seed a selection from raw role grants (see ``normalize_grants``)."""
        return cls(normalize_grants(grants))

    # ── Queries ────────────────────────────────────────

    @property
    def paths(self) -> frozenset[str]:
        return self._paths

    def is_selected(self, path: str) -> bool:
        return path in self._paths

    def is_partially_selected(self, path: str, tree: PermissionTree) -> bool:
        """True iff some, but not all, descendants of ``path`` are selected.

        Leaves and paths missing from ``tree`` are never partial.
        """
        descendants = tree.descendants_of(path)
        if not descendants:
            return False
        selected = len(descendants & self._paths)
        return 0 < selected < len(descendants)

    def checkbox_state(self, path: str, tree: PermissionTree) -> CheckboxState:
        """Checked when selected, indeterminate when partially selected."""
        if path in self._paths:
            return CheckboxState.CHECKED
        if self.is_partially_selected(path, tree):
            return CheckboxState.INDETERMINATE
        return CheckboxState.UNCHECKED

    def stale_paths(self, tree: PermissionTree) -> frozenset[str]:
        """Selected paths the catalog no longer contains."""
        return frozenset(p for p in self._paths if p not in tree)

    # ── Bulk replacement ───────────────────────────────

    def select_all(self, universe: Iterable[str]) -> SelectionSet:
        """Selection holding exactly ``universe``."""
        return SelectionSet(universe)

    def deselect_all(self) -> SelectionSet:
        """Empty selection."""
        return SelectionSet()

    # ── Export ─────────────────────────────────────────

    def to_list(self, tree: PermissionTree | None = None) -> list[str]:
        """Flat, deduplicated path list.

        With a tree, catalog paths come first in catalog order, followed by
        any paths the catalog does not know, sorted. Without a tree the
        whole list is sorted.
        """
        if tree is None:
            return sorted(self._paths)
        ordered = [path for path in tree.paths if path in self._paths]
        ordered.extend(sorted(self.stale_paths(tree)))
        return ordered

    # ── Value semantics ────────────────────────────────

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SelectionSet):
            return self._paths == other._paths
        if isinstance(other, (set, frozenset)):
            return self._paths == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._paths)

    def __repr__(self) -> str:
        return f"SelectionSet({sorted(self._paths)!r})"


__all__ = [
    "CheckboxState",
    "SelectionSet",
    "normalize_grants",
]
