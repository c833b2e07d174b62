from typing import List, Optional

from pydantic import BaseModel, Field

from shiftsync.core.enums import Permission, UserRole

# Fields that decide what a user can reach; changing them is a user-management action
ACCESS_FIELDS = ("role", "permissions", "assignedVenues", "active")


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    fullName: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    role: UserRole = UserRole.EMPLOYEE
    phone: Optional[str] = None
    profilePicture: Optional[str] = None
    assignedVenues: List[int] = []
    permissions: List[Permission] = []
    active: bool = True


class UserUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    fullName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profilePicture: Optional[str] = None
    role: Optional[UserRole] = None
    assignedVenues: Optional[List[int]] = None
    permissions: Optional[List[Permission]] = None
    active: Optional[bool] = None
