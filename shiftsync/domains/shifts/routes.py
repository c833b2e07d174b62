from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import Shift, User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.shifts.models import ShiftCreate, ShiftUpdate
from shiftsync.domains.shifts.service import ShiftService
from shiftsync.shared.permissions import require_authenticated, require_venue_access
from shiftsync.shared.validators import parse_date_range, parse_id_param

router = APIRouter(prefix="/shifts", tags=["Shifts"])


@router.get("", response_model=List[Shift], operation_id="getShifts")
async def list_shifts(
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    venueId: Optional[str] = None,
    employeeId: Optional[str] = None,
    user: User = Depends(require_venue_access()),
    storage: MemStorage = Depends(get_storage),
) -> List[Shift]:
    """
    List shifts.

    Filters, first match wins:
    - startDate & endDate: requires VIEW_ALL_SHIFTS
    - venueId: requires access to the venue
    - employeeId: own shifts, or VIEW_ALL_SHIFTS for anyone else's
    - none: every shift with VIEW_ALL_SHIFTS, otherwise the caller's own
    """
    return await ShiftService(storage).list_shifts(
        user,
        date_range=parse_date_range(startDate, endDate),
        venue_id=parse_id_param(venueId, "venue"),
        employee_id=parse_id_param(employeeId, "employee"),
    )


@router.post(
    "",
    response_model=Shift,
    status_code=status.HTTP_201_CREATED,
    operation_id="createShift",
)
async def create_shift(
    data: ShiftCreate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> Shift:
    return await ShiftService(storage).create_shift(data, user)


@router.get("/{id}", response_model=Shift, operation_id="getShift")
async def get_shift(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> Shift:
    """
    Get a single shift.

    Visible to the assigned employee, VIEW_ALL_SHIFTS holders and venue
    shift managers with access to the shift's venue.
    """
    return await ShiftService(storage).get_shift(id, user)


@router.patch("/{id}", response_model=Shift, operation_id="updateShift")
async def update_shift(
    id: int,
    data: ShiftUpdate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> Shift:
    return await ShiftService(storage).update_shift(id, data, user)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="deleteShift",
)
async def delete_shift(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> None:
    await ShiftService(storage).delete_shift(id, user)
