"""Catalog and role payload loading.

Turns what the permission store returns into engine types:

- ``build_tree(payload)`` — raw catalog → ``PermissionTree``.
- ``parse_role(payload)`` — raw role → ``Role``.

Catalog payloads are either a list of root nodes or a mapping wrapping that
list under ``data`` or ``permissions``. Each node is a mapping with a
``name`` and optional children under any configured child key
(``sub_permissions`` or ``children`` by default). Missing, ``null`` and
empty child lists all mean leaf.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from ..config import PermissionsConfig
from ..exceptions import InvalidCatalogShape, PersistenceError
from ..models import Role
from .tree import PermissionNode, PermissionTree

logger = logging.getLogger(__name__)

_CATALOG_WRAPPER_KEYS = ("data", "permissions")
_ROLE_WRAPPER_KEYS = ("role", "data")


def extract_catalog_items(payload: Any) -> Sequence[Any]:
    """Unwrap the list of root nodes from a catalog payload.

    Raises:
        InvalidCatalogShape: If no list of roots can be found.
    """
    if payload is None:
        return ()
    if isinstance(payload, (list, tuple)):
        return payload
    if isinstance(payload, Mapping):
        for key in _CATALOG_WRAPPER_KEYS:
            items = payload.get(key)
            if isinstance(items, (list, tuple)):
                return items
    raise InvalidCatalogShape(
        f"Permission catalog must be a list of nodes, got {type(payload).__name__}",
        payload_type=type(payload).__name__,
    )


def _children_of(raw: Mapping[str, Any], child_keys: Sequence[str]) -> Sequence[Any]:
    for key in child_keys:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, (list, tuple)):
            raise InvalidCatalogShape(
                f"Children of '{raw.get('name')}' under '{key}' must be a list",
                name=raw.get("name"),
            )
        return value
    return ()


def parse_node(
    raw: Any,
    child_keys: Sequence[str] = ("sub_permissions", "children"),
    *,
    max_depth: int = 16,
    _depth: int = 0,
    _on_stack: Optional[set[int]] = None,
) -> PermissionNode:
    """Convert one raw catalog entry (and its children) into a PermissionNode.

    Raises:
        InvalidCatalogShape: On a non-mapping entry, a missing or non-string
            name, a self-containing entry, or depth beyond ``max_depth``.
    """
    if isinstance(raw, PermissionNode):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidCatalogShape(f"Catalog entry must be a mapping, got {type(raw).__name__}")
    if _depth >= max_depth:
        raise InvalidCatalogShape(
            f"Permission catalog exceeds maximum depth of {max_depth} at '{raw.get('name')}'",
            max_depth=max_depth,
        )

    on_stack = set() if _on_stack is None else _on_stack
    if id(raw) in on_stack:
        raise InvalidCatalogShape(f"Cycle detected at '{raw.get('name')}'", name=raw.get("name"))

    name = raw.get("name")
    if not isinstance(name, str):
        raise InvalidCatalogShape("Catalog entry is missing a string 'name'", entry_keys=sorted(map(str, raw)))

    on_stack.add(id(raw))
    try:
        children = tuple(
            parse_node(child, child_keys, max_depth=max_depth, _depth=_depth + 1, _on_stack=on_stack)
            for child in _children_of(raw, child_keys)
        )
    finally:
        on_stack.discard(id(raw))

    try:
        return PermissionNode(name=name, children=children, id=raw.get("_id", raw.get("id")))
    except ValidationError as e:
        raise InvalidCatalogShape(f"Invalid catalog entry '{name}': {e}", name=name) from e


def build_tree(payload: Any, config: Optional[PermissionsConfig] = None) -> PermissionTree:
    """Build a validated PermissionTree from a raw catalog payload.

    Raises:
        InvalidCatalogShape: If the payload is not a well-formed tree.
    """
    config = config or PermissionsConfig()
    try:
        roots = [
            parse_node(item, config.child_keys, max_depth=config.max_depth)
            for item in extract_catalog_items(payload)
        ]
        return PermissionTree(roots, max_depth=config.max_depth)
    except InvalidCatalogShape as e:
        logger.warning("Rejected permission catalog: %s", e.message, extra={"error_code": e.code})
        raise


def parse_role(payload: Any) -> Role:
    """Convert a raw role payload (optionally wrapped under ``role``/``data``).

    Raises:
        PersistenceError: If the payload is not a role object.
    """
    if isinstance(payload, Role):
        return payload
    if isinstance(payload, Mapping):
        for key in _ROLE_WRAPPER_KEYS:
            inner = payload.get(key)
            if isinstance(inner, Mapping):
                payload = inner
                break
        try:
            return Role.model_validate(dict(payload))
        except ValidationError as e:
            raise PersistenceError(f"Malformed role payload: {e}") from e
    raise PersistenceError(f"Role payload must be a mapping, got {type(payload).__name__}")


__all__ = [
    "build_tree",
    "extract_catalog_items",
    "parse_node",
    "parse_role",
]
