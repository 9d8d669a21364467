from .config import LogLevel, PermissionsConfig, SharedConfig, load_shared_config_from_env
from .exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidCatalogShape,
    LuxeCoreError,
    PersistenceError,
    StaleReferenceError,
)
from .logging import (
    safe_preview,
    LuxeCoreFormatter,
    RoleLoggerAdapter,
    setup_logging,
    get_role_logger,
)
from .permissions import (
    DEFAULT_CATALOG,
    CheckboxState,
    FlatPermission,
    ModuleCapabilities,
    Modules,
    PermissionNode,
    PermissionTree,
    Permissions,
    SelectionSet,
    build_tree,
    expand_grants,
    filter_by_permission,
    filter_roots,
    has_all_permissions,
    has_any_permission,
    has_permission,
    matching_paths,
    module_capabilities,
    normalize_grants,
    role_permissions,
    toggle,
)
from .models import Role
from .interfaces import InMemoryPermissionStore, PermissionStore
from .editor import PermissionEditor, SelectionSummary, open_editor

__all__ = [
    'LogLevel',
    'PermissionsConfig',
    'SharedConfig',
    'load_shared_config_from_env',
    'CatalogError',
    'ConfigurationError',
    'InvalidCatalogShape',
    'LuxeCoreError',
    'PersistenceError',
    'StaleReferenceError',
    'safe_preview',
    'LuxeCoreFormatter',
    'RoleLoggerAdapter',
    'setup_logging',
    'get_role_logger',
    'DEFAULT_CATALOG',
    'CheckboxState',
    'FlatPermission',
    'ModuleCapabilities',
    'Modules',
    'PermissionNode',
    'PermissionTree',
    'Permissions',
    'SelectionSet',
    'build_tree',
    'expand_grants',
    'filter_by_permission',
    'filter_roots',
    'has_all_permissions',
    'has_any_permission',
    'has_permission',
    'matching_paths',
    'module_capabilities',
    'normalize_grants',
    'role_permissions',
    'toggle',
    'Role',
    'InMemoryPermissionStore',
    'PermissionStore',
    'PermissionEditor',
    'SelectionSummary',
    'open_editor',
]
