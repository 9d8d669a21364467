"""Role permission-tree engine for LuxeBoard.

Defines:
- PermissionNode / PermissionTree: the catalog of grantable capabilities
- SelectionSet: the grants of the role being edited
- toggle(): cascading select/deselect with ancestor auto-promotion
- filter_roots() / matching_paths(): read-only catalog search
- has_permission() and friends: checks over saved grant lists
- Permissions / DEFAULT_CATALOG: the dashboard's canonical catalog
"""

from .paths import (
    SEPARATOR,
    ancestors_of,
    depth_of,
    descendants_in,
    direct_children_in,
    join_path,
    parent_of,
)
from .tree import DEFAULT_MAX_DEPTH, FlatPermission, PermissionNode, PermissionTree, flatten_nodes
from .selection import CheckboxState, SelectionSet, normalize_grants
from .propagation import deselect_path, select_path, toggle
from .search import filter_roots, matching_paths
from .constants import DEFAULT_CATALOG, Modules, Permissions
from .access import (
    ModuleCapabilities,
    expand_grants,
    filter_by_permission,
    has_all_permissions,
    has_any_permission,
    has_permission,
    module_capabilities,
    role_permissions,
)
from .catalog import build_tree, extract_catalog_items, parse_node, parse_role

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_MAX_DEPTH",
    "SEPARATOR",
    "CheckboxState",
    "FlatPermission",
    "ModuleCapabilities",
    "Modules",
    "PermissionNode",
    "PermissionTree",
    "Permissions",
    "SelectionSet",
    "ancestors_of",
    "build_tree",
    "depth_of",
    "descendants_in",
    "deselect_path",
    "direct_children_in",
    "expand_grants",
    "extract_catalog_items",
    "filter_by_permission",
    "filter_roots",
    "flatten_nodes",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "join_path",
    "matching_paths",
    "module_capabilities",
    "normalize_grants",
    "parent_of",
    "parse_node",
    "parse_role",
    "role_permissions",
    "select_path",
    "toggle",
]
