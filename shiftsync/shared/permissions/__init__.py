"""
Shared permission system for role, permission and venue scoped access control.

Three layers, leaves first:

- models: the Permission vocabulary and the immutable role registry
- services: pure checks (has_permission, has_venue_access) and the named
  own / global / venue combinators handlers use for record-level decisions
- dependencies: FastAPI guards that resolve the acting user, pull the
  relevant identifier out of the request and apply a check

Usage:
    from shiftsync.shared.permissions import Permission, require_permission

    @router.get("/users")
    async def list_users(
        user: User = Depends(require_permission(Permission.VIEW_ALL_USERS)),
    ):
        pass
"""

from .dependencies import (
    require_admin,
    require_authenticated,
    require_permission,
    require_self_or_permission,
    require_super_admin,
    require_venue_access,
)
from .identifiers import extract_identifier
from .models import (
    ROLE_PERMISSIONS,
    SHIFT_POLICY,
    TILL_POLICY,
    TIME_ENTRY_POLICY,
    Permission,
    ResourcePolicy,
    UserRole,
    get_role_permissions,
)
from .services import (
    can_manage_resource,
    can_view_resource,
    has_global_or_venue_permission,
    has_permission,
    has_venue_access,
    is_admin,
    owns_resource,
)

__all__ = [
    "Permission",
    "ROLE_PERMISSIONS",
    "ResourcePolicy",
    "SHIFT_POLICY",
    "TILL_POLICY",
    "TIME_ENTRY_POLICY",
    "UserRole",
    "can_manage_resource",
    "can_view_resource",
    "extract_identifier",
    "get_role_permissions",
    "has_global_or_venue_permission",
    "has_permission",
    "has_venue_access",
    "is_admin",
    "owns_resource",
    "require_admin",
    "require_authenticated",
    "require_permission",
    "require_self_or_permission",
    "require_super_admin",
    "require_venue_access",
]
