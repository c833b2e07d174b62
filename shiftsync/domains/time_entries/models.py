from datetime import datetime
from typing import Optional

from pydantic import BaseModel

# Fields the owning employee may still change on an unverified entry
EMPLOYEE_EDITABLE_FIELDS = ("clockOut", "notes")


class TimeEntryCreate(BaseModel):
    employeeId: int
    shiftId: int
    clockIn: datetime
    clockOut: Optional[datetime] = None
    verified: bool = False
    notes: Optional[str] = None
    coordinates: Optional[dict] = None  # {clockInLocation: {lat, lng}, ...}


class TimeEntryUpdate(BaseModel):
    clockIn: Optional[datetime] = None
    clockOut: Optional[datetime] = None
    verified: Optional[bool] = None
    notes: Optional[str] = None
    coordinates: Optional[dict] = None
