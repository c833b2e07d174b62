from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import TimeEntry, User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.time_entries.models import TimeEntryCreate, TimeEntryUpdate
from shiftsync.domains.time_entries.service import TimeEntryService
from shiftsync.shared.permissions import require_authenticated
from shiftsync.shared.validators import parse_date_range, parse_id_param

router = APIRouter(prefix="/time-entries", tags=["Time Entries"])


@router.get("", response_model=List[TimeEntry], operation_id="getTimeEntries")
async def list_time_entries(
    employeeId: Optional[str] = None,
    shiftId: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> List[TimeEntry]:
    return await TimeEntryService(storage).list_time_entries(
        user,
        employee_id=parse_id_param(employeeId, "employee"),
        shift_id=parse_id_param(shiftId, "shift"),
        date_range=parse_date_range(startDate, endDate),
    )


@router.post(
    "",
    response_model=TimeEntry,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTimeEntry",
)
async def create_time_entry(
    data: TimeEntryCreate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TimeEntry:
    return await TimeEntryService(storage).create_time_entry(data, user)


@router.get("/{id}", response_model=TimeEntry, operation_id="getTimeEntry")
async def get_time_entry(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TimeEntry:
    return await TimeEntryService(storage).get_time_entry(id, user)


@router.patch("/{id}", response_model=TimeEntry, operation_id="updateTimeEntry")
async def update_time_entry(
    id: int,
    data: TimeEntryUpdate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TimeEntry:
    """
    Update a time entry.

    The owning employee can clock out and edit notes until the entry is
    verified; time managers for the venue can change anything.
    """
    return await TimeEntryService(storage).update_time_entry(id, data, user)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="deleteTimeEntry",
)
async def delete_time_entry(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> None:
    await TimeEntryService(storage).delete_time_entry(id, user)
