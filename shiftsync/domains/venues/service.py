from typing import List

from shiftsync.core.entities import Venue
from shiftsync.core.storage import MemStorage
from shiftsync.domains.venues.models import VenueCreate, VenueUpdate
from shiftsync.shared.exceptions import VenueNotFoundError


async def get_all_venues(storage: MemStorage) -> List[Venue]:
    return await storage.get_all_venues()


async def get_venue(venue_id: int, storage: MemStorage) -> Venue:
    venue = await storage.get_venue(venue_id)
    if not venue:
        raise VenueNotFoundError()
    return venue


async def create_venue(data: VenueCreate, storage: MemStorage) -> Venue:
    return await storage.create_venue(data.model_dump())


async def update_venue(venue_id: int, data: VenueUpdate, storage: MemStorage) -> Venue:
    """
    Apply a partial update to a venue.

    Raises:
        VenueNotFoundError: If the venue does not exist
    """
    await get_venue(venue_id, storage)

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in ("description", "coordinates")
    }
    updated = await storage.update_venue(venue_id, changes)
    if not updated:
        raise VenueNotFoundError()
    return updated


async def delete_venue(venue_id: int, storage: MemStorage) -> None:
    if not await storage.delete_venue(venue_id):
        raise VenueNotFoundError()
