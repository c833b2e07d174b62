from typing import Optional

from shiftsync.core.entities import User

from .models import (
    ADMIN_ROLES,
    ROLE_PERMISSIONS,
    Permission,
    ResourcePolicy,
    RolePermissionMap,
    UserRole,
    get_role_permissions,
)


def has_permission(
    user: User, permission: Permission, registry: RolePermissionMap = ROLE_PERMISSIONS
) -> bool:
    """
    Check if a user holds a specific permission.

    Super admins hold every permission. Otherwise the permission must come
    from the user's role or from the user's own granted permissions; grants
    only ever add to what the role provides.

    Args:
        user: The acting user
        permission: The permission to validate
        registry: Role to permission mapping to consult

    Returns:
        True if the user has the permission, False otherwise
    """
    if user.role == UserRole.SUPER_ADMIN:
        return True

    if permission in get_role_permissions(user.role, registry):
        return True

    return permission in (user.permissions or [])


def is_admin(user: User) -> bool:
    """Super admins, admins and IT staff."""
    return user.role in ADMIN_ROLES


def has_venue_access(user: User, venue_id: Optional[int]) -> bool:
    """
    Check if a user may see data belonging to a venue.

    Administrative roles see every venue; everyone else only the venues
    they are assigned to.
    """
    if is_admin(user):
        return True

    if venue_id is None:
        return False

    return venue_id in (user.assignedVenues or [])


def owns_resource(user: User, owner_id: Optional[int]) -> bool:
    return owner_id is not None and owner_id == user.id


def has_global_or_venue_permission(
    user: User,
    global_permission: Permission,
    venue_permission: Permission,
    venue_id: Optional[int],
    registry: RolePermissionMap = ROLE_PERMISSIONS,
) -> bool:
    """
    Global permission, or the venue-scoped permission plus access to the venue.
    """
    if has_permission(user, global_permission, registry):
        return True

    return has_permission(user, venue_permission, registry) and has_venue_access(
        user, venue_id
    )


def can_view_resource(
    user: User,
    policy: ResourcePolicy,
    owner_id: Optional[int],
    venue_id: Optional[int],
    registry: RolePermissionMap = ROLE_PERMISSIONS,
) -> bool:
    """
    Read access: own record, view-all permission, or venue management.

    Args:
        user: The acting user
        policy: Permissions gating the resource type
        owner_id: Employee the record belongs to
        venue_id: Venue the record belongs to, directly or through its shift
        registry: Role to permission mapping to consult

    Returns:
        True if the user may read the record
    """
    return (
        owns_resource(user, owner_id)
        or has_permission(user, policy.view_all, registry)
        or (
            has_permission(user, policy.manage_venue, registry)
            and has_venue_access(user, venue_id)
        )
    )


def can_manage_resource(
    user: User,
    policy: ResourcePolicy,
    venue_id: Optional[int],
    registry: RolePermissionMap = ROLE_PERMISSIONS,
) -> bool:
    """Write access without the ownership branch."""
    return has_global_or_venue_permission(
        user, policy.manage_all, policy.manage_venue, venue_id, registry
    )
