from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TillVerificationCreate(BaseModel):
    shiftId: int
    employeeId: int
    expectedAmount: int = Field(..., description="Expected till total in cents")
    actualAmount: int = Field(..., description="Counted till total in cents")
    notes: Optional[str] = None


class TillVerificationUpdate(BaseModel):
    """
    Partial update for a till verification.

    Sending a truthy ``verifiedBy`` or any ``verifiedAt`` is a request to
    verify the record; the server stamps both from the acting user.
    """

    expectedAmount: Optional[int] = None
    actualAmount: Optional[int] = None
    notes: Optional[str] = None
    verifiedBy: Optional[int] = None
    verifiedAt: Optional[datetime] = None
