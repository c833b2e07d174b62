from typing import List

from fastapi import APIRouter, Depends, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.auth.models import UserResponse
from shiftsync.domains.users.models import UserCreate, UserUpdate
from shiftsync.domains.users.service import UserService
from shiftsync.shared.permissions import (
    Permission,
    require_permission,
    require_self_or_permission,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse], operation_id="getUsers")
async def get_users(
    user: User = Depends(require_permission(Permission.VIEW_ALL_USERS)),
    storage: MemStorage = Depends(get_storage),
) -> List[UserResponse]:
    users = await UserService(storage).list_users()
    return [UserResponse.from_entity(u) for u in users]


@router.get(
    "/employees", response_model=List[UserResponse], operation_id="getEmployees"
)
async def get_employees(
    user: User = Depends(require_permission(Permission.VIEW_ALL_USERS)),
    storage: MemStorage = Depends(get_storage),
) -> List[UserResponse]:
    employees = await UserService(storage).list_employees()
    return [UserResponse.from_entity(u) for u in employees]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createUser",
)
async def create_user(
    data: UserCreate,
    user: User = Depends(require_permission(Permission.MANAGE_USERS)),
    storage: MemStorage = Depends(get_storage),
) -> UserResponse:
    """
    Create a user account.

    Requires MANAGE_USERS. Only owners may create owner accounts.
    """
    created = await UserService(storage).create_user(data, user)
    return UserResponse.from_entity(created)


@router.get("/{id}", response_model=UserResponse, operation_id="getUser")
async def get_user(
    id: int,
    user: User = Depends(
        require_self_or_permission("id", Permission.VIEW_ALL_USERS)
    ),
    storage: MemStorage = Depends(get_storage),
) -> UserResponse:
    """
    Get a single user.

    Users can always read their own profile; anyone else needs VIEW_ALL_USERS.
    """
    return UserResponse.from_entity(await UserService(storage).get_user(id))


@router.patch("/{id}", response_model=UserResponse, operation_id="updateUser")
async def update_user(
    id: int,
    data: UserUpdate,
    user: User = Depends(require_self_or_permission("id", Permission.MANAGE_USERS)),
    storage: MemStorage = Depends(get_storage),
) -> UserResponse:
    """
    Update a user.

    Users can edit their own profile; editing anyone else needs MANAGE_USERS.

    Business rules:
    - Role, granted permissions, venues and active status need MANAGE_USERS
      and can't be changed on one's own account
    - Only owners can promote to owner or modify an owner's account
    """
    updated = await UserService(storage).update_user(id, data, user)
    return UserResponse.from_entity(updated)
