from typing import Optional

from pydantic import BaseModel, Field

from shiftsync.core.entities import Coordinates


class VenueCreate(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    description: Optional[str] = None
    coordinates: Optional[Coordinates] = None  # For geofencing clock-ins


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    coordinates: Optional[Coordinates] = None
