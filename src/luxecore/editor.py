"""Role permission editing session.

One ``PermissionEditor`` backs one open "Update Permissions" panel: it is
seeded from the role's saved grants, routes every click through
``propagation.toggle``, derives checkbox and summary state on demand, and
hands the complete flat path list back to the store on save.

Usage:
    editor = await open_editor(store, role_id)
    editor.toggle("Bookings.View Bookings")
    editor.checkbox_state("Bookings")   # CheckboxState.INDETERMINATE
    role = await editor.save(store)

Cancelling is dropping the editor without calling ``save``.
"""

from __future__ import annotations

from typing import Mapping, NamedTuple, Optional
from uuid import uuid4

from .config import PermissionsConfig
from .interfaces import PermissionStore
from .logging import get_role_logger, safe_preview
from .models import Role
from .permissions.access import role_permissions
from .permissions.catalog import build_tree, parse_role
from .permissions.propagation import toggle
from .permissions.search import filter_roots, matching_paths
from .permissions.selection import CheckboxState, SelectionSet
from .permissions.tree import PermissionNode, PermissionTree


_MERGED_ROLE_FIELDS = ("id", "name", "permissions")


class SelectionSummary(NamedTuple):
    """Header numbers: "{selected} of {total} selected"."""

    selected: int
    total: int
    all_selected: bool


class PermissionEditor:
    """Editing session for one role's permission grants."""

    def __init__(
        self,
        tree: PermissionTree,
        role: Role,
        selection: Optional[SelectionSet] = None,
        *,
        config: Optional[PermissionsConfig] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.tree = tree
        self.role = role
        self.config = config or PermissionsConfig()
        self.session_id = session_id or uuid4().hex
        self._log = get_role_logger(__name__, role_id=role.id, session_id=self.session_id)

        if selection is None:
            selection = SelectionSet(role.grants)
        stale = selection.stale_paths(tree)
        if stale:
            if self.config.drop_stale_grants:
                selection = SelectionSet(selection.paths - stale)
                self._log.info("Dropped %d stale grants: %s", len(stale), safe_preview(stale))
            else:
                self._log.debug("Keeping %d stale grants: %s", len(stale), safe_preview(stale))

        self._initial = selection
        self._selection = selection

    # ── State ──────────────────────────────────────────

    @property
    def selection(self) -> SelectionSet:
        return self._selection

    @property
    def is_dirty(self) -> bool:
        """True once the selection differs from what was loaded or last saved."""
        return self._selection != self._initial

    def is_selected(self, path: str) -> bool:
        return self._selection.is_selected(path)

    def is_partially_selected(self, path: str) -> bool:
        return self._selection.is_partially_selected(path, self.tree)

    def checkbox_state(self, path: str) -> CheckboxState:
        return self._selection.checkbox_state(path, self.tree)

    def summary(self) -> SelectionSummary:
        """Selected catalog paths out of the catalog size.

        Stale grants kept from the role are not counted.
        """
        total = len(self.tree)
        selected = sum(1 for path in self._selection if path in self.tree)
        return SelectionSummary(selected=selected, total=total, all_selected=total > 0 and selected == total)

    # ── Mutation ───────────────────────────────────────

    def toggle(self, path: str) -> SelectionSet:
        self._selection = toggle(path, self._selection, self.tree)
        return self._selection

    def select_all(self) -> SelectionSet:
        self._selection = self._selection.select_all(self.tree.paths)
        return self._selection

    def deselect_all(self) -> SelectionSet:
        self._selection = self._selection.deselect_all()
        return self._selection

    def toggle_select_all(self) -> SelectionSet:
        """Deselect everything when every catalog path is selected, else select everything."""
        if self.summary().all_selected:
            return self.deselect_all()
        return self.select_all()

    # ── Display ────────────────────────────────────────

    def visible_roots(self, query: Optional[str] = None) -> list[PermissionNode]:
        return filter_roots(self.tree, query)

    def matching_paths(self, query: Optional[str] = None) -> list[str]:
        return matching_paths(self.tree, query)

    def effective_permissions(self) -> list[str]:
        """Grants the role holds as last loaded or saved.

        The configured superadmin role holds the whole catalog regardless of
        its saved list.
        """
        return role_permissions(self.role, self.tree, self.config.superadmin_role)

    # ── Persistence ────────────────────────────────────

    def to_paths(self) -> list[str]:
        """Complete grant list to persist: flat, deduplicated, catalog order first."""
        return self._selection.to_list(self.tree)

    async def save(self, store: PermissionStore) -> Role:
        """Persist the full grant list and return the updated role.

        The store reply is merged over the current role: fields it omits
        (or leaves empty) are kept, and the saved list stands in for missing
        permissions. A reply that is not a role mapping counts as a plain
        acknowledgement. Store errors propagate unchanged; nothing is retried.
        """
        paths = self.to_paths()
        self._log.info("Saving %d permissions for role %r", len(paths), self.role.name)
        result = await store.save_role_permissions(self.role.id, paths)

        updated = self.role.model_copy(update={"permissions": paths})
        if isinstance(result, (Mapping, Role)):
            reply = parse_role(result)
            changes = {
                field: getattr(reply, field)
                for field in reply.model_fields_set
                if field in _MERGED_ROLE_FIELDS and getattr(reply, field)
            }
            updated = updated.model_copy(update=changes)

        self.role = updated
        self._initial = self._selection
        return updated


async def open_editor(
    store: PermissionStore,
    role_id: str,
    config: Optional[PermissionsConfig] = None,
) -> PermissionEditor:
    """Load the catalog and the role, then open an editing session.

    Raises:
        InvalidCatalogShape: If the catalog is malformed; no session opens.
    """
    config = config or PermissionsConfig()
    catalog_payload = await store.load_catalog()
    role_payload = await store.load_role(role_id)

    tree = build_tree(catalog_payload, config)
    role = parse_role(role_payload)
    if role.id is None:
        role = role.model_copy(update={"id": role_id})

    editor = PermissionEditor(tree, role, config=config)
    editor._log.info(
        "Opened permission editor: %d catalog paths, %d grants",
        len(tree),
        len(editor.selection),
    )
    return editor


__all__ = [
    "PermissionEditor",
    "SelectionSummary",
    "open_editor",
]
