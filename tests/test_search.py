"""Tests for read-only catalog search."""

from __future__ import annotations

from luxecore import PermissionTree, SelectionSet, filter_roots, matching_paths, toggle


def _names(nodes) -> list[str]:
    return [node.name for node in nodes]


class TestFilterRoots:
    """Tests for narrowing root groups by query."""

    def test_blank_query_returns_all_roots(self, catalog_tree: PermissionTree) -> None:
        assert _names(filter_roots(catalog_tree, "")) == list(_names(catalog_tree.roots))
        assert _names(filter_roots(catalog_tree, None)) == list(_names(catalog_tree.roots))
        assert _names(filter_roots(catalog_tree, "   ")) == list(_names(catalog_tree.roots))

    def test_matches_descendant_name(self, catalog_tree: PermissionTree) -> None:
        assert _names(filter_roots(catalog_tree, "add user")) == ["Users"]

    def test_matches_root_name(self, catalog_tree: PermissionTree) -> None:
        assert _names(filter_roots(catalog_tree, "hosts")) == ["Hosts"]

    def test_case_insensitive(self, catalog_tree: PermissionTree) -> None:
        assert _names(filter_roots(catalog_tree, "GUESTS")) == ["Guests"]

    def test_common_term_keeps_catalog_order(self, catalog_tree: PermissionTree) -> None:
        assert _names(filter_roots(catalog_tree, "view")) == [
            "Properties",
            "Bookings",
            "Guests",
            "Tasks",
            "Users",
            "Hosts",
        ]

    def test_matches_deep_descendant(self, deep_tree: PermissionTree) -> None:
        assert _names(filter_roots(deep_tree, "week")) == ["bookings"]

    def test_matches_names_not_paths(self, deep_tree: PermissionTree) -> None:
        """The dotted path itself is not searched."""
        assert filter_roots(deep_tree, "bookings.view") == []

    def test_no_match(self, catalog_tree: PermissionTree) -> None:
        assert filter_roots(catalog_tree, "payments") == []


class TestMatchingPaths:
    """Tests for listing matching paths."""

    def test_matching_paths(self, deep_tree: PermissionTree) -> None:
        assert matching_paths(deep_tree, "ca") == ["bookings.view.calendar"]

    def test_blank_query_matches_nothing(self, deep_tree: PermissionTree) -> None:
        assert matching_paths(deep_tree, " ") == []


class TestSelectionUntouched:
    """Filtering never changes what is selected."""

    def test_filter_then_clear_keeps_selection(self, small_tree: PermissionTree) -> None:
        state = toggle("guests", SelectionSet(["bookings.create"]), small_tree)
        before = SelectionSet(state.paths)

        assert _names(filter_roots(small_tree, "delete")) == ["bookings"]
        state = toggle("bookings.delete", state, small_tree)
        assert _names(filter_roots(small_tree, "")) == ["bookings", "guests"]

        # Hidden groups keep their grants.
        assert {"guests", "guests.create"} <= state.paths
        assert before.paths - {"bookings.create"} <= state.paths
