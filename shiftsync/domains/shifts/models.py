from datetime import datetime
from typing import Optional

from pydantic import BaseModel, model_validator

from shiftsync.core.entities import as_utc
from shiftsync.core.enums import ShiftStatus


class ShiftCreate(BaseModel):
    venueId: int
    employeeId: Optional[int] = None  # Unassigned shifts are allowed
    startTime: datetime
    endTime: datetime
    title: Optional[str] = None
    status: ShiftStatus = ShiftStatus.PENDING
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_times(self) -> "ShiftCreate":
        if as_utc(self.endTime) <= as_utc(self.startTime):
            raise ValueError("endTime must be after startTime")
        return self


class ShiftUpdate(BaseModel):
    venueId: Optional[int] = None
    employeeId: Optional[int] = None
    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None
    title: Optional[str] = None
    status: Optional[ShiftStatus] = None
    notes: Optional[str] = None
