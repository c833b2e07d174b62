"""Stored record types.

These are the shapes the storage layer keeps and hands back. Request and
response schemas live with their domain in ``shiftsync.domains.<area>.models``.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from shiftsync.core.enums import Permission, ShiftStatus, UserRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so stored and submitted values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Coordinates(BaseModel):
    lat: float
    lng: float


class User(BaseModel):
    id: int
    username: str
    passwordHash: str
    fullName: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    profilePicture: Optional[str] = None
    assignedVenues: List[int] = Field(default_factory=list)
    permissions: List[Permission] = Field(default_factory=list)
    active: bool = True
    lastLogin: Optional[datetime] = None
    createdById: Optional[int] = None
    createdAt: datetime = Field(default_factory=utcnow)


class Venue(BaseModel):
    id: int
    name: str
    address: str
    description: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    createdAt: datetime = Field(default_factory=utcnow)


class Shift(BaseModel):
    id: int
    venueId: int
    employeeId: Optional[int] = None
    startTime: datetime
    endTime: datetime
    title: Optional[str] = None
    status: ShiftStatus = ShiftStatus.PENDING
    notes: Optional[str] = None
    createdAt: datetime = Field(default_factory=utcnow)


class TimeEntry(BaseModel):
    id: int
    employeeId: int
    shiftId: int
    clockIn: datetime
    clockOut: Optional[datetime] = None
    verified: bool = False
    notes: Optional[str] = None
    coordinates: Optional[dict] = None  # {clockInLocation: {...}, clockOutLocation: {...}}
    createdAt: datetime = Field(default_factory=utcnow)


class Message(BaseModel):
    id: int
    senderId: int
    receiverId: Optional[int] = None  # None for broadcasts
    content: str
    isRead: bool = False
    sentAt: datetime = Field(default_factory=utcnow)


class TillVerification(BaseModel):
    id: int
    shiftId: int
    employeeId: int
    expectedAmount: int  # in cents
    actualAmount: int  # in cents
    discrepancy: int = 0  # actualAmount - expectedAmount
    notes: Optional[str] = None
    verifiedBy: Optional[int] = None
    verifiedAt: Optional[datetime] = None
    createdAt: datetime = Field(default_factory=utcnow)
