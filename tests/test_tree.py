"""Tests for the permission tree model and path helpers."""

from __future__ import annotations

import pytest
from luxecore import InvalidCatalogShape, PermissionNode, PermissionTree, StaleReferenceError
from luxecore.permissions import (
    FlatPermission,
    ancestors_of,
    depth_of,
    descendants_in,
    direct_children_in,
    flatten_nodes,
    join_path,
    parent_of,
)


class TestPathHelpers:
    """Tests for string-level path helpers."""

    def test_join_skips_empty_segments(self) -> None:
        assert join_path("", "bookings") == "bookings"
        assert join_path("bookings", "create") == "bookings.create"

    def test_parent_of(self) -> None:
        assert parent_of("bookings.delete.own") == "bookings.delete"
        assert parent_of("bookings") is None

    def test_depth_of(self) -> None:
        assert depth_of("bookings") == 0
        assert depth_of("bookings.delete.own") == 2

    def test_ancestors_nearest_first(self) -> None:
        assert ancestors_of("a.b.c") == ("a.b", "a")
        assert ancestors_of("a") == ()

    def test_descendants_in_uses_dot_prefix(self) -> None:
        """'tasks' must not capture 'tasksarchive'."""
        universe = ["tasks", "tasks.assign", "tasksarchive", "tasksarchive.view"]
        assert descendants_in(universe, "tasks") == ("tasks.assign",)

    def test_direct_children_in(self) -> None:
        universe = ["a", "a.b", "a.b.c", "a.d"]
        assert direct_children_in(universe, "a") == ("a.b", "a.d")
        assert direct_children_in(universe, "missing") == ()


class TestFlatten:
    """Tests for depth-first flattening."""

    def test_order_and_depth(self, deep_tree: PermissionTree) -> None:
        """Node precedes its children; siblings keep catalog order."""
        flat = deep_tree.flatten()
        assert [item.path for item in flat][:6] == [
            "bookings",
            "bookings.create",
            "bookings.delete",
            "bookings.delete.own",
            "bookings.delete.any",
            "bookings.view",
        ]
        assert flat[0] == FlatPermission("bookings", "bookings", 0)
        assert flat[3] == FlatPermission("bookings.delete.own", "own", 2)

    def test_flatten_subtree_by_path(self, deep_tree: PermissionTree) -> None:
        flat = deep_tree.flatten("bookings.view.calendar")
        assert [item.path for item in flat] == [
            "bookings.view.calendar",
            "bookings.view.calendar.month",
            "bookings.view.calendar.week",
        ]
        assert [item.depth for item in flat] == [2, 3, 3]

    def test_flatten_subtree_by_node(self, small_tree: PermissionTree) -> None:
        guests = small_tree.roots[1]
        assert [item.path for item in small_tree.flatten(guests)] == ["guests", "guests.create"]

    def test_flatten_foreign_node(self, small_tree: PermissionTree) -> None:
        """A node outside the tree is flattened on its own from depth 0."""
        node = PermissionNode(name="x", children=(PermissionNode(name="y"),))
        assert small_tree.flatten(node) == [FlatPermission("x", "x", 0), FlatPermission("x.y", "y", 1)]

    def test_flatten_stale_path(self, small_tree: PermissionTree) -> None:
        assert small_tree.flatten("payments") == []

    def test_flatten_nodes_with_prefix(self) -> None:
        flat = flatten_nodes([PermissionNode(name="own")], "bookings.delete")
        assert flat == [FlatPermission("bookings.delete.own", "own", 2)]

    def test_paths_cover_every_node(self, small_tree: PermissionTree) -> None:
        assert small_tree.paths == ("bookings", "bookings.create", "bookings.delete", "guests", "guests.create")
        assert len(small_tree) == 5
        assert list(small_tree) == list(small_tree.paths)


class TestLookups:
    """Tests for descendant, parent and direct-children lookups."""

    def test_descendants_of(self, deep_tree: PermissionTree) -> None:
        assert deep_tree.descendants_of("bookings.delete") == {"bookings.delete.own", "bookings.delete.any"}
        assert len(deep_tree.descendants_of("bookings")) == 9

    def test_descendants_of_leaf(self, deep_tree: PermissionTree) -> None:
        assert deep_tree.descendants_of("reports") == frozenset()

    def test_direct_children_of(self, deep_tree: PermissionTree) -> None:
        assert deep_tree.direct_children_of("bookings") == {
            "bookings.create",
            "bookings.delete",
            "bookings.view",
        }

    def test_parent_of(self, deep_tree: PermissionTree) -> None:
        assert deep_tree.parent_of("bookings.view.calendar.week") == "bookings.view.calendar"
        assert deep_tree.parent_of("bookings") is None

    def test_ancestors_of(self, deep_tree: PermissionTree) -> None:
        assert deep_tree.ancestors_of("bookings.view.calendar.week") == (
            "bookings.view.calendar",
            "bookings.view",
            "bookings",
        )

    def test_stale_paths_yield_empty_results(self, small_tree: PermissionTree) -> None:
        """Unknown paths never raise from public lookups."""
        assert small_tree.descendants_of("payments") == frozenset()
        assert small_tree.direct_children_of("payments") == frozenset()
        assert small_tree.parent_of("payments.refund") is None
        assert small_tree.ancestors_of("payments.refund") == ()
        assert small_tree.subtree_of("payments") == frozenset()
        assert small_tree.depth_of("payments") is None
        assert small_tree.get("payments") is None
        assert "payments" not in small_tree

    def test_strict_node_lookup_raises(self, small_tree: PermissionTree) -> None:
        with pytest.raises(StaleReferenceError) as exc_info:
            small_tree.node("payments")
        assert exc_info.value.details["path"] == "payments"

    def test_same_name_under_different_parents(self, small_tree: PermissionTree) -> None:
        """'create' is unique among siblings, not across the tree."""
        assert "bookings.create" in small_tree
        assert "guests.create" in small_tree
        assert small_tree.node("guests.create").name == "create"

    def test_shared_node_object(self) -> None:
        """A frozen node reused under two parents still gives two paths."""
        view = PermissionNode(name="view")
        tree = PermissionTree([
            PermissionNode(name="a", children=(view,)),
            PermissionNode(name="b", children=(view,)),
        ])
        assert tree.paths == ("a", "a.view", "b", "b.view")


class TestCatalogValidation:
    """Tests for rejecting malformed catalogs at construction."""

    def test_duplicate_sibling_names(self) -> None:
        with pytest.raises(InvalidCatalogShape, match="Duplicate permission name 'create'"):
            PermissionTree([
                PermissionNode(name="bookings", children=(PermissionNode(name="create"), PermissionNode(name="create"))),
            ])

    def test_duplicate_root_names(self) -> None:
        with pytest.raises(InvalidCatalogShape, match="Duplicate"):
            PermissionTree([PermissionNode(name="a"), PermissionNode(name="a")])

    def test_empty_name(self) -> None:
        with pytest.raises(InvalidCatalogShape, match="Empty permission name"):
            PermissionTree([PermissionNode(name="  ")])

    def test_dotted_name(self) -> None:
        with pytest.raises(InvalidCatalogShape, match="must not contain"):
            PermissionTree([PermissionNode(name="bookings.create")])

    def test_max_depth(self) -> None:
        chain = PermissionNode(name="c")
        chain = PermissionNode(name="b", children=(chain,))
        chain = PermissionNode(name="a", children=(chain,))
        PermissionTree([chain], max_depth=3)
        with pytest.raises(InvalidCatalogShape, match="maximum depth of 2"):
            PermissionTree([chain], max_depth=2)

    def test_cycle(self) -> None:
        """A node reachable from itself is rejected, not walked forever."""
        node = PermissionNode(name="loop")
        object.__setattr__(node, "children", (node,))
        with pytest.raises(InvalidCatalogShape, match="Cycle detected"):
            PermissionTree([node])

    def test_error_code(self) -> None:
        with pytest.raises(InvalidCatalogShape) as exc_info:
            PermissionTree([PermissionNode(name="")])
        assert exc_info.value.code == "INVALID_CATALOG_SHAPE"


class TestPermissionNode:
    """Tests for PermissionNode payload handling."""

    def test_sub_permissions_alias(self) -> None:
        node = PermissionNode.model_validate({"name": "Bookings", "sub_permissions": [{"name": "View"}]})
        assert node.children[0].name == "View"

    def test_null_children_is_leaf(self) -> None:
        node = PermissionNode.model_validate({"name": "Reports", "sub_permissions": None})
        assert node.is_leaf

    def test_id_alias_coerced_to_str(self) -> None:
        node = PermissionNode.model_validate({"name": "Bookings", "_id": 42})
        assert node.id == "42"

    def test_frozen(self) -> None:
        node = PermissionNode(name="a")
        with pytest.raises(Exception):
            node.name = "b"  # type: ignore[misc]
