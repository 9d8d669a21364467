"""Shared catalog fixtures for luxecore tests."""

from __future__ import annotations

import pytest
from luxecore import DEFAULT_CATALOG, PermissionNode, PermissionTree


def _node(name: str, *children: PermissionNode) -> PermissionNode:
    return PermissionNode(name=name, children=children)


@pytest.fixture
def small_tree() -> PermissionTree:
    """bookings → [create, delete]; guests → [create]."""
    return PermissionTree([
        _node("bookings", _node("create"), _node("delete")),
        _node("guests", _node("create")),
    ])


@pytest.fixture
def deep_tree() -> PermissionTree:
    """Three levels under ``bookings`` plus a flat ``tasks`` group."""
    return PermissionTree([
        _node(
            "bookings",
            _node("create"),
            _node("delete", _node("own"), _node("any")),
            _node("view", _node("list"), _node("calendar", _node("month"), _node("week"))),
        ),
        _node("tasks", _node("assign")),
        _node("reports"),
    ])


@pytest.fixture
def catalog_tree() -> PermissionTree:
    """The dashboard's default catalog."""
    return PermissionTree(DEFAULT_CATALOG)


@pytest.fixture
def raw_catalog() -> list[dict]:
    """Catalog payload as the remote API returns it."""
    return [
        {
            "_id": "p1",
            "name": "Bookings",
            "sub_permissions": [
                {"name": "View Bookings"},
                {"name": "Add Bookings", "sub_permissions": []},
                {"name": "Delete Bookings", "sub_permissions": [{"name": "Own"}, {"name": "Any"}]},
            ],
        },
        {"_id": "p2", "name": "Guests", "sub_permissions": [{"name": "View Guests"}]},
        {"_id": "p3", "name": "Reports", "sub_permissions": None},
    ]
