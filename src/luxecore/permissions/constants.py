"""Permission constants and the default LuxeBoard catalog.

Provides:
- ``Permissions`` — canonical permission paths (``{Module}.{Action}`` format).
- ``Modules`` — top-level capability groups.
- ``DEFAULT_CATALOG`` — the dashboard's catalog as ``PermissionNode`` roots.
"""

from __future__ import annotations

from .paths import join_path
from .tree import PermissionNode


class Modules:
    """Top-level capability groups of the dashboard."""

    PROPERTIES = "Properties"
    BOOKINGS = "Bookings"
    GUESTS = "Guests"
    TASKS = "Tasks"
    USERS = "Users"
    HOSTS = "Hosts"  # Superadmin only

    ALL = ("Properties", "Bookings", "Guests", "Tasks", "Users", "Hosts")


class Permissions:
    """Canonical permission paths for LuxeBoard.

    Format: ``{Module}.{Action}``. A module root grants every action
    beneath it.

    Two modes of use:

    1. **Static constants**::

        has_permission(granted, Permissions.BOOKINGS_VIEW)

    2. **Dynamic builders** — for nested or custom catalog entries::

        Permissions.path("Bookings", "Delete Bookings", "Own")
        → "Bookings.Delete Bookings.Own"
        Permissions.action("Guests", "View")  → "Guests.View Guests"
    """

    # ── Properties ──────────────────────────────────────
    PROPERTIES = "Properties"
    PROPERTIES_VIEW = "Properties.View Properties"
    PROPERTIES_ADD = "Properties.Add Properties"
    PROPERTIES_EDIT = "Properties.Edit Properties"
    PROPERTIES_DELETE = "Properties.Delete Properties"

    # ── Bookings ────────────────────────────────────────
    BOOKINGS = "Bookings"
    BOOKINGS_VIEW = "Bookings.View Bookings"
    BOOKINGS_ADD = "Bookings.Add Bookings"
    BOOKINGS_EDIT = "Bookings.Edit Bookings"
    BOOKINGS_DELETE = "Bookings.Delete Bookings"

    # ── Guests ──────────────────────────────────────────
    GUESTS = "Guests"
    GUESTS_VIEW = "Guests.View Guests"
    GUESTS_ADD = "Guests.Add Guests"
    GUESTS_EDIT = "Guests.Edit Guests"
    GUESTS_DELETE = "Guests.Delete Guests"

    # ── Tasks ───────────────────────────────────────────
    TASKS = "Tasks"
    TASKS_VIEW = "Tasks.View Tasks"
    TASKS_ADD = "Tasks.Add Tasks"
    TASKS_EDIT = "Tasks.Edit Tasks"
    TASKS_DELETE = "Tasks.Delete Tasks"

    # ── Users ───────────────────────────────────────────
    USERS = "Users"
    USERS_VIEW = "Users.View Users"
    USERS_ADD = "Users.Add User"
    USERS_EDIT = "Users.Edit User"
    USERS_DELETE = "Users.Delete User"

    # ── Hosts (superadmin only) ─────────────────────────
    HOSTS = "Hosts"
    HOSTS_VIEW = "Hosts.View Hosts"
    HOSTS_ADD = "Hosts.Add Host"
    HOSTS_EDIT = "Hosts.Edit Host"
    HOSTS_DELETE = "Hosts.Delete Host"

    # ── Builders ────────────────────────────────────────

    @staticmethod
    def path(*segments: str) -> str:
        """Build a permission path from node names.

        Example::

            Permissions.path("Bookings")                     # "Bookings"
            Permissions.path("Bookings", "View Bookings")    # "Bookings.View Bookings"
        """
        return join_path(*segments)

    @staticmethod
    def action(module: str, verb: str) -> str:
        """Build ``"{module}.{verb} {module}"``, the catalog's CRUD naming.

        Example::

            Permissions.action("Tasks", "Edit")  # "Tasks.Edit Tasks"
        """
        return join_path(module, f"{verb} {module}")


def _module(name: str, *actions: str) -> PermissionNode:
    return PermissionNode(name=name, children=tuple(PermissionNode(name=a) for a in actions))


DEFAULT_CATALOG: tuple[PermissionNode, ...] = (
    _module("Properties", "View Properties", "Add Properties", "Edit Properties", "Delete Properties"),
    _module("Bookings", "View Bookings", "Add Bookings", "Edit Bookings", "Delete Bookings"),
    _module("Guests", "View Guests", "Add Guests", "Edit Guests", "Delete Guests"),
    _module("Tasks", "View Tasks", "Add Tasks", "Edit Tasks", "Delete Tasks"),
    _module("Users", "View Users", "Add User", "Edit User", "Delete User"),
    _module("Hosts", "View Hosts", "Add Host", "Edit Host", "Delete Host"),
)


__all__ = [
    "DEFAULT_CATALOG",
    "Modules",
    "Permissions",
]
