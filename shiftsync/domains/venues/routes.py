from typing import List

from fastapi import APIRouter, Depends, Response, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import Venue
from shiftsync.core.storage import MemStorage
from shiftsync.domains.venues.models import VenueCreate, VenueUpdate
from shiftsync.domains.venues.service import (
    create_venue,
    delete_venue,
    get_all_venues,
    get_venue,
    update_venue,
)
from shiftsync.shared.permissions import (
    Permission,
    require_permission,
    require_venue_access,
)

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get(
    "",
    response_model=List[Venue],
    dependencies=[Depends(require_permission(Permission.VIEW_ALL_VENUES))],
    operation_id="getVenues",
)
async def list_venues(storage: MemStorage = Depends(get_storage)) -> List[Venue]:
    return await get_all_venues(storage)


@router.post(
    "",
    response_model=Venue,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.MANAGE_VENUES))],
    operation_id="createVenue",
)
async def post_venue(
    data: VenueCreate, storage: MemStorage = Depends(get_storage)
) -> Venue:
    return await create_venue(data, storage)


@router.get(
    "/{venueId}",
    response_model=Venue,
    dependencies=[Depends(require_venue_access())],
    operation_id="getVenue",
)
async def read_venue(venueId: int, storage: MemStorage = Depends(get_storage)) -> Venue:
    """
    Get a single venue.

    Administrators see every venue; other users only their assigned venues.
    """
    return await get_venue(venueId, storage)


@router.patch(
    "/{venueId}",
    response_model=Venue,
    dependencies=[
        Depends(require_permission(Permission.MANAGE_VENUES)),
        Depends(require_venue_access()),
    ],
    operation_id="updateVenue",
)
async def patch_venue(
    venueId: int, data: VenueUpdate, storage: MemStorage = Depends(get_storage)
) -> Venue:
    """
    Update a venue.

    Requires MANAGE_VENUES and access to the venue.
    """
    return await update_venue(venueId, data, storage)


@router.delete(
    "/{venueId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[
        Depends(require_permission(Permission.MANAGE_VENUES)),
        Depends(require_venue_access()),
    ],
    operation_id="deleteVenue",
)
async def remove_venue(venueId: int, storage: MemStorage = Depends(get_storage)) -> None:
    await delete_venue(venueId, storage)
