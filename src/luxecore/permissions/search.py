"""Read-only search over the permission catalog.

Filtering narrows which root groups are displayed. It never touches a
``SelectionSet``; clearing the query shows the full catalog again with the
selection exactly as it was.
"""

from __future__ import annotations

from .tree import PermissionNode, PermissionTree


def _normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()


def matching_paths(tree: PermissionTree, query: str | None) -> list[str]:
    """Catalog paths whose own name contains ``query``, case-insensitively.

    Matches the node name, not the full path, so searching ``"view"`` finds
    ``"Bookings.View Bookings"`` but searching ``"bookings.view"`` finds
    nothing. A blank query matches nothing.
    """
    needle = _normalize_query(query)
    if not needle:
        return []
    return [item.path for item in tree.flatten() if needle in item.name.casefold()]


def filter_roots(tree: PermissionTree, query: str | None) -> list[PermissionNode]:
    """Root nodes whose subtree (root included) has a name matching ``query``.

    A blank query returns every root, in catalog order.
    """
    needle = _normalize_query(query)
    if not needle:
        return list(tree.roots)
    return [
        root
        for root in tree.roots
        if any(needle in item.name.casefold() for item in tree.flatten(root))
    ]


__all__ = [
    "filter_roots",
    "matching_paths",
]
