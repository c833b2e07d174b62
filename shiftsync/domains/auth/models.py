# shiftsync/domains/auth/models.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from shiftsync.core.entities import User
from shiftsync.core.enums import Permission, UserRole


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash."""

    id: int
    username: str
    fullName: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    profilePicture: Optional[str] = None
    assignedVenues: List[int] = []
    permissions: List[Permission] = []
    active: bool = True
    lastLogin: Optional[datetime] = None
    createdById: Optional[int] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls.model_validate(user.model_dump(exclude={"passwordHash"}))


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    confirmPassword: str
    fullName: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    accessToken: str
    tokenType: str = "bearer"
    user: UserResponse
