"""Permission catalog tree.

Provides:
- ``PermissionNode`` — one named capability with ordered children.
- ``FlatPermission`` — a flattened row ``(path, name, depth)``.
- ``PermissionTree`` — immutable, path-indexed view of a catalog with
  flatten / descendants / parent / direct-children lookups.

The tree is validated once at construction. Lookups on paths that are not
in the catalog return empty results instead of raising, because a role's
saved grants can outlive the capabilities they referred to.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, NamedTuple, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidCatalogShape, StaleReferenceError
from .paths import SEPARATOR, is_descendant, join_path, parent_of

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16


class PermissionNode(BaseModel):
    """A grantable capability in the permission catalog.

    Accepts children under ``children`` or ``sub_permissions`` (the remote
    API's field name) and an optional ``id`` / ``_id``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    children: tuple[PermissionNode, ...] = Field(
        default=(),
        validation_alias=AliasChoices("children", "sub_permissions"),
    )
    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))

    @field_validator("children", mode="before")
    @classmethod
    def _none_is_leaf(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        return None if v is None else str(v)

    @property
    def is_leaf(self) -> bool:
        return not self.children


PermissionNode.model_rebuild()


class FlatPermission(NamedTuple):
    """One node of a flattened catalog."""

    path: str
    name: str
    depth: int


def _iter_nodes(
    nodes: Iterable[PermissionNode],
    prefix: str,
    depth: int,
    max_depth: int,
    on_stack: set[int],
) -> Iterator[tuple[PermissionNode, str, int]]:
    """Depth-first, sibling-ordered walk that validates tree shape."""
    if depth >= max_depth:
        raise InvalidCatalogShape(
            f"Permission catalog exceeds maximum depth of {max_depth} under '{prefix}'",
            path=prefix,
            max_depth=max_depth,
        )

    seen: set[str] = set()
    for node in nodes:
        name = node.name
        if not name or not name.strip():
            raise InvalidCatalogShape(f"Empty permission name under '{prefix or '<root>'}'", path=prefix)
        if SEPARATOR in name:
            raise InvalidCatalogShape(
                f"Permission name '{name}' must not contain '{SEPARATOR}'",
                path=prefix,
                name=name,
            )
        if name in seen:
            raise InvalidCatalogShape(
                f"Duplicate permission name '{name}' under '{prefix or '<root>'}'",
                path=prefix,
                name=name,
            )
        seen.add(name)

        if id(node) in on_stack:
            raise InvalidCatalogShape(f"Cycle detected at '{join_path(prefix, name)}'", path=join_path(prefix, name))

        path = join_path(prefix, name)
        yield node, path, depth

        if node.children:
            on_stack.add(id(node))
            yield from _iter_nodes(node.children, path, depth + 1, max_depth, on_stack)
            on_stack.discard(id(node))


def flatten_nodes(
    nodes: Iterable[PermissionNode],
    prefix: str = "",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[FlatPermission]:
    """Flatten nodes and all their descendants, depth first, in sibling order.

    Args:
        nodes: Nodes to flatten (usually catalog roots).
        prefix: Path of the nodes' parent, "" for roots.
        max_depth: Deepest level accepted below ``prefix``.

    Raises:
        InvalidCatalogShape: On cycles, duplicate sibling names, empty or
            dotted names, or excessive depth.
    """
    base_depth = prefix.count(SEPARATOR) + 1 if prefix else 0
    return [
        FlatPermission(path, node.name, base_depth + depth)
        for node, path, depth in _iter_nodes(nodes, prefix, 0, max_depth, set())
    ]


class PermissionTree:
    """Immutable, path-indexed permission catalog.

    Built once per catalog load. All lookups after construction are
    dictionary reads.

    Example::

        tree = PermissionTree([
            PermissionNode(name="bookings", children=(
                PermissionNode(name="create"),
                PermissionNode(name="delete"),
            )),
        ])
        tree.descendants_of("bookings")      # frozenset({"bookings.create", "bookings.delete"})
        tree.parent_of("bookings.create")    # "bookings"
        tree.descendants_of("gone.missing")  # frozenset()
    """

    __slots__ = ("_roots", "_flat", "_position", "_nodes", "_path_by_node", "_descendants", "_children")

    def __init__(self, roots: Iterable[PermissionNode], *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._roots: tuple[PermissionNode, ...] = tuple(roots)

        flat: list[FlatPermission] = []
        nodes: dict[str, PermissionNode] = {}
        path_by_node: dict[int, str] = {}
        for node, path, depth in _iter_nodes(self._roots, "", 0, max_depth, set()):
            flat.append(FlatPermission(path, node.name, depth))
            nodes[path] = node
            # Frozen nodes may be reused under several parents; first path wins.
            path_by_node.setdefault(id(node), path)

        paths = [item.path for item in flat]
        descendants: dict[str, frozenset[str]] = {}
        children: dict[str, frozenset[str]] = {}
        # Pre-order keeps each subtree contiguous right after its root.
        for i, path in enumerate(paths):
            end = i + 1
            while end < len(paths) and is_descendant(paths[end], path):
                end += 1
            descendants[path] = frozenset(paths[i + 1 : end])
            children[path] = frozenset(join_path(path, child.name) for child in nodes[path].children)

        self._flat: tuple[FlatPermission, ...] = tuple(flat)
        self._position: dict[str, int] = {path: i for i, path in enumerate(paths)}
        self._nodes = nodes
        self._path_by_node = path_by_node
        self._descendants = descendants
        self._children = children

        logger.debug("Built permission tree: %d roots, %d paths", len(self._roots), len(self._flat))

    # ── Catalog shape ──────────────────────────────────

    @property
    def roots(self) -> tuple[PermissionNode, ...]:
        return self._roots

    @property
    def paths(self) -> tuple[str, ...]:
        """Every path in the catalog, in depth-first sibling order."""
        return tuple(item.path for item in self._flat)

    universe = paths

    def __contains__(self, path: object) -> bool:
        return path in self._position

    def __len__(self) -> int:
        return len(self._flat)

    def __iter__(self) -> Iterator[str]:
        return (item.path for item in self._flat)

    def __repr__(self) -> str:
        return f"PermissionTree(roots={len(self._roots)}, paths={len(self._flat)})"

    def node(self, path: str) -> PermissionNode:
        """Strict lookup.

        Raises:
            StaleReferenceError: If ``path`` is not in the catalog.
        """
        try:
            return self._nodes[path]
        except KeyError:
            raise StaleReferenceError(f"Unknown permission path: {path!r}", path=path) from None

    def get(self, path: str) -> PermissionNode | None:
        return self._nodes.get(path)

    def path_of(self, node: PermissionNode) -> str | None:
        """Path of a node object belonging to this tree."""
        return self._path_by_node.get(id(node))

    def depth_of(self, path: str) -> int | None:
        position = self._position.get(path)
        return None if position is None else self._flat[position].depth

    # ── Traversal ──────────────────────────────────────

    def flatten(self, node: PermissionNode | str | None = None) -> list[FlatPermission]:
        """Flatten the catalog, or one node and its descendants.

        ``node`` may be a node of this tree, its path, or None for the whole
        catalog. Paths and depths are always absolute. A node object that is
        not part of this tree is flattened on its own, rooted at depth 0.
        Unknown paths flatten to an empty list.
        """
        if node is None:
            return list(self._flat)

        if isinstance(node, PermissionNode):
            path = self.path_of(node)
            if path is None:
                return flatten_nodes([node])
        else:
            path = node

        position = self._position.get(path)
        if position is None:
            return []
        return list(self._flat[position : position + 1 + len(self._descendants[path])])

    def descendants_of(self, path: str) -> frozenset[str]:
        """All paths strictly below ``path``; empty for leaves and stale paths."""
        return self._descendants.get(path, frozenset())

    def direct_children_of(self, path: str) -> frozenset[str]:
        """Paths exactly one level below ``path``; empty for leaves and stale paths."""
        return self._children.get(path, frozenset())

    def parent_of(self, path: str) -> str | None:
        """Parent path, or None for roots and stale paths."""
        if path not in self._position:
            return None
        return parent_of(path)

    def ancestors_of(self, path: str) -> tuple[str, ...]:
        """Ancestors nearest first; empty for roots and stale paths."""
        ancestors: list[str] = []
        parent = self.parent_of(path)
        while parent is not None:
            ancestors.append(parent)
            parent = self.parent_of(parent)
        return tuple(ancestors)

    def subtree_of(self, path: str) -> frozenset[str]:
        """``path`` plus its descendants; empty for stale paths."""
        if path not in self._position:
            return frozenset()
        return self._descendants[path] | {path}


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "FlatPermission",
    "PermissionNode",
    "PermissionTree",
    "flatten_nodes",
]
