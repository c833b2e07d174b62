# shiftsync/domains/users/service.py
import logging
from typing import Any, Dict, List

from shiftsync.core.entities import User
from shiftsync.core.enums import UserRole
from shiftsync.core.storage import MemStorage
from shiftsync.domains.auth.service import hash_password
from shiftsync.domains.users.models import ACCESS_FIELDS, UserCreate, UserUpdate
from shiftsync.shared.exceptions import (
    ForbiddenError,
    InvalidDataError,
    UserNotFoundError,
)
from shiftsync.shared.permissions import Permission, has_permission

logger = logging.getLogger(__name__)

OWNER_ONLY_MESSAGE = "Only owners can create or modify owner accounts"

# Profile fields that may be cleared with an explicit null
NULLABLE_FIELDS = {"phone", "profilePicture"}


def _access_field_changed(existing: User, field: str, value: Any) -> bool:
    current = getattr(existing, field)
    if isinstance(current, list):
        return set(current) != set(value)
    return current != value


def ensure_can_change_access(
    actor: User, target: User, changes: Dict[str, Any]
) -> None:
    """
    Guard changes to a user's role, granted permissions, venues or status.

    Rules:
    - Only holders of MANAGE_USERS may change these fields
    - Nobody changes them on their own record
    - Only a super admin may promote someone to super admin

    Raises:
        ForbiddenError: If any rule is broken
    """
    changed = [
        field
        for field in ACCESS_FIELDS
        if field in changes and _access_field_changed(target, field, changes[field])
    ]
    if not changed:
        return

    if not has_permission(actor, Permission.MANAGE_USERS):
        if "role" in changed:
            raise ForbiddenError("You do not have permission to change user roles")
        raise ForbiddenError("You do not have permission to change user access")

    if actor.id == target.id:
        raise ForbiddenError("You cannot change your own role or access")

    if (
        "role" in changed
        and changes["role"] == UserRole.SUPER_ADMIN
        and actor.role != UserRole.SUPER_ADMIN
    ):
        raise ForbiddenError(OWNER_ONLY_MESSAGE)


class UserService:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def list_users(self) -> List[User]:
        return await self.storage.get_all_users()

    async def list_employees(self) -> List[User]:
        return await self.storage.get_users_by_role(UserRole.EMPLOYEE)

    async def get_user(self, user_id: int) -> User:
        user = await self.storage.get_user(user_id)
        if not user:
            raise UserNotFoundError()
        return user

    async def create_user(self, data: UserCreate, actor: User) -> User:
        """
        Create a user on behalf of a user manager.

        Raises:
            ForbiddenError: If a non-owner tries to create an owner account
            InvalidDataError: If the username is taken
        """
        if data.role == UserRole.SUPER_ADMIN and actor.role != UserRole.SUPER_ADMIN:
            raise ForbiddenError(OWNER_ONLY_MESSAGE)

        if await self.storage.get_user_by_username(data.username):
            raise InvalidDataError("Username already exists")

        record = data.model_dump(exclude={"password"})
        record["passwordHash"] = hash_password(data.password)
        record["createdById"] = actor.id

        user = await self.storage.create_user(record)
        logger.info(
            "User %s created user %s with role %s", actor.id, user.id, user.role.value
        )
        return user

    async def update_user(self, user_id: int, data: UserUpdate, actor: User) -> User:
        """
        Apply a partial update to a user.

        The route guard has already established that the actor is the target
        or holds MANAGE_USERS; the checks here cover owner accounts and
        access-bearing fields.

        Raises:
            UserNotFoundError: If the target does not exist
            ForbiddenError: If the actor may not make this change
            InvalidDataError: If a new username is taken
        """
        existing = await self.get_user(user_id)

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        if (
            existing.role == UserRole.SUPER_ADMIN
            and existing.id != actor.id
            and actor.role != UserRole.SUPER_ADMIN
        ):
            raise ForbiddenError(OWNER_ONLY_MESSAGE)

        ensure_can_change_access(actor, existing, changes)

        if "username" in changes and changes["username"] != existing.username:
            other = await self.storage.get_user_by_username(changes["username"])
            if other and other.id != existing.id:
                raise InvalidDataError("Username already exists")

        if "password" in changes:
            changes["passwordHash"] = hash_password(changes.pop("password"))

        updated = await self.storage.update_user(user_id, changes)
        if not updated:
            raise UserNotFoundError()
        return updated
