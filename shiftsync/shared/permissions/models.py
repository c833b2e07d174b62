from types import MappingProxyType
from typing import FrozenSet, Mapping, NamedTuple, Union

from shiftsync.core.enums import Permission, UserRole

__all__ = [
    "ADMIN_ROLES",
    "Permission",
    "ROLE_PERMISSIONS",
    "ResourcePolicy",
    "RolePermissionMap",
    "SHIFT_POLICY",
    "TILL_POLICY",
    "TIME_ENTRY_POLICY",
    "UserRole",
    "get_role_permissions",
]

RolePermissionMap = Mapping[UserRole, FrozenSet[Permission]]


ROLE_PERMISSIONS: RolePermissionMap = MappingProxyType(
    {
        # Super admins also bypass every check in has_permission
        UserRole.SUPER_ADMIN: frozenset(Permission),
        UserRole.IT: frozenset(
            {
                Permission.SYSTEM_SETTINGS,
                Permission.VIEW_ALL_USERS,
                Permission.VIEW_ALL_VENUES,
                Permission.VIEW_ALL_SHIFTS,
                Permission.VIEW_ALL_TIME,
                Permission.VIEW_ALL_TILLS,
            }
        ),
        UserRole.ADMIN: frozenset(
            {
                Permission.MANAGE_USERS,
                Permission.VIEW_ALL_USERS,
                Permission.MANAGE_VENUES,
                Permission.VIEW_ALL_VENUES,
                Permission.MANAGE_ALL_SHIFTS,
                Permission.VIEW_ALL_SHIFTS,
                Permission.MANAGE_ALL_TIME,
                Permission.VIEW_ALL_TIME,
                Permission.SEND_MASS_MESSAGES,
                Permission.MANAGE_ALL_TILLS,
                Permission.VIEW_ALL_TILLS,
            }
        ),
        UserRole.MANAGER: frozenset(
            {
                Permission.VIEW_ALL_USERS,
                Permission.VIEW_ALL_VENUES,
                Permission.MANAGE_VENUE_SHIFTS,
                Permission.VIEW_ALL_SHIFTS,
                Permission.MANAGE_VENUE_TIME,
                Permission.VIEW_ALL_TIME,
                Permission.MANAGE_VENUE_TILLS,
                Permission.VIEW_ALL_TILLS,
            }
        ),
        UserRole.SUPERVISOR: frozenset(
            {
                Permission.VIEW_ALL_SHIFTS,
                Permission.MANAGE_VENUE_TIME,
                Permission.VIEW_ALL_TIME,
                Permission.MANAGE_VENUE_TILLS,
            }
        ),
        UserRole.EMPLOYEE: frozenset(),
    }
)

# Roles that see every venue regardless of assignment
ADMIN_ROLES: FrozenSet[UserRole] = frozenset(
    {UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.IT}
)


def get_role_permissions(
    role: Union[UserRole, str], registry: RolePermissionMap = ROLE_PERMISSIONS
) -> FrozenSet[Permission]:
    """
    Return the permissions granted to a role.

    Args:
        role: The role, as enum member or raw value
        registry: Role to permission mapping to consult

    Returns:
        The role's permission set, empty for unknown roles
    """
    try:
        role = UserRole(role)
    except ValueError:
        return frozenset()
    return registry.get(role, frozenset())


class ResourcePolicy(NamedTuple):
    """The three permissions that gate one resource type."""

    view_all: Permission
    manage_all: Permission
    manage_venue: Permission


SHIFT_POLICY = ResourcePolicy(
    view_all=Permission.VIEW_ALL_SHIFTS,
    manage_all=Permission.MANAGE_ALL_SHIFTS,
    manage_venue=Permission.MANAGE_VENUE_SHIFTS,
)

TIME_ENTRY_POLICY = ResourcePolicy(
    view_all=Permission.VIEW_ALL_TIME,
    manage_all=Permission.MANAGE_ALL_TIME,
    manage_venue=Permission.MANAGE_VENUE_TIME,
)

TILL_POLICY = ResourcePolicy(
    view_all=Permission.VIEW_ALL_TILLS,
    manage_all=Permission.MANAGE_ALL_TILLS,
    manage_venue=Permission.MANAGE_VENUE_TILLS,
)
