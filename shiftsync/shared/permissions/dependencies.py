import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request

from shiftsync.core.entities import User
from shiftsync.domains.auth.dependencies import get_optional_user
from shiftsync.shared.exceptions import ForbiddenError, NotAuthenticatedError

from .identifiers import extract_identifier
from .models import Permission, UserRole
from .services import has_permission, has_venue_access, is_admin

logger = logging.getLogger(__name__)

Guard = Callable[..., Awaitable[User]]


def _require_user(user: Optional[User]) -> User:
    if user is None:
        raise NotAuthenticatedError()
    return user


def _deny(user: User, request: Request, message: str) -> ForbiddenError:
    logger.info(
        "Denied %s %s for user %s: %s",
        request.method,
        request.url.path,
        user.id,
        message,
    )
    return ForbiddenError(message)


def permission_denied_message(permission: Permission) -> str:
    return (
        "You don't have permission to perform this action "
        f"({permission.value} required)"
    )


async def require_authenticated(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """Rejects anonymous requests; any signed-in user passes."""
    return _require_user(user)


def require_permission(permission: Permission) -> Guard:
    """
    Dependency factory for permission-based authorization.

    Args:
        permission: The permission required to access the endpoint

    Returns:
        Async dependency that validates the permission and returns the user
    """

    async def check_permission(
        request: Request,
        user: Optional[User] = Depends(get_optional_user),
    ) -> User:
        user = _require_user(user)

        if not has_permission(user, permission):
            raise _deny(user, request, permission_denied_message(permission))

        return user

    return check_permission


def require_venue_access(param_name: str = "venueId") -> Guard:
    """
    Dependency factory for venue-scoped authorization.

    The venue id is looked up by ``param_name`` in the path, then the query
    string, then the JSON body. Requests that carry no venue id pass
    untouched, so the guard only constrains routes with venue context.

    Args:
        param_name: Name of the parameter holding the venue id

    Returns:
        Async dependency that validates venue access and returns the user
    """

    async def check_venue_access(
        request: Request,
        user: Optional[User] = Depends(get_optional_user),
    ) -> User:
        user = _require_user(user)

        venue_id = await extract_identifier(request, param_name)
        if venue_id is None:
            return user

        if not has_venue_access(user, venue_id):
            raise _deny(user, request, "You don't have access to this venue")

        return user

    return check_venue_access


async def require_admin(
    request: Request,
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """Only super admins, admins and IT staff pass."""
    user = _require_user(user)

    if not is_admin(user):
        raise _deny(user, request, "Administrator privileges required")

    return user


async def require_super_admin(
    request: Request,
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """Only super admins (owners) pass."""
    user = _require_user(user)

    if user.role != UserRole.SUPER_ADMIN:
        raise _deny(user, request, "Owner privileges required")

    return user


def require_self_or_permission(
    param_name: str = "userId",
    permission: Permission = Permission.VIEW_ALL_USERS,
) -> Guard:
    """
    Dependency factory letting users act on their own records.

    The target user id is looked up like the venue id in
    ``require_venue_access``. A request without one passes; a request about
    the acting user passes; any other target requires ``permission``.

    Args:
        param_name: Name of the parameter holding the target user id
        permission: Permission required to act on other users' records

    Returns:
        Async dependency that validates access and returns the user
    """

    async def check_self_or_permission(
        request: Request,
        user: Optional[User] = Depends(get_optional_user),
    ) -> User:
        user = _require_user(user)

        target_id = await extract_identifier(request, param_name)
        if target_id is None or target_id == user.id:
            return user

        if not has_permission(user, permission):
            raise _deny(user, request, permission_denied_message(permission))

        return user

    return check_self_or_permission
