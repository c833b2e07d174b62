# shiftsync/domains/shifts/service.py
from datetime import datetime
from typing import List, Optional, Tuple

from shiftsync.core.entities import Shift, User, as_utc
from shiftsync.core.storage import MemStorage
from shiftsync.domains.shifts.models import ShiftCreate, ShiftUpdate
from shiftsync.shared.exceptions import (
    EmployeeNotFoundError,
    ForbiddenError,
    InvalidDataError,
    ShiftNotFoundError,
    VenueNotFoundError,
)
from shiftsync.shared.permissions import (
    SHIFT_POLICY,
    can_manage_resource,
    can_view_resource,
    has_permission,
    has_venue_access,
    owns_resource,
)


class ShiftService:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def _get_existing(self, shift_id: int) -> Shift:
        shift = await self.storage.get_shift(shift_id)
        if not shift:
            raise ShiftNotFoundError()
        return shift

    async def _ensure_venue_exists(self, venue_id: int) -> None:
        if not await self.storage.get_venue(venue_id):
            raise VenueNotFoundError()

    async def _ensure_employee_exists(self, employee_id: Optional[int]) -> None:
        if employee_id is not None and not await self.storage.get_user(employee_id):
            raise EmployeeNotFoundError()

    async def list_shifts(
        self,
        actor: User,
        date_range: Optional[Tuple[datetime, datetime]] = None,
        venue_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> List[Shift]:
        """
        List shifts, applying the first filter given.

        Filter precedence: date range, venue, employee. Without a filter,
        VIEW_ALL_SHIFTS holders get every shift and everyone else their own.

        Raises:
            ForbiddenError: If the actor may not see the requested slice
        """
        if date_range is not None:
            if not has_permission(actor, SHIFT_POLICY.view_all):
                raise ForbiddenError("You don't have permission to view all shifts")
            return await self.storage.get_shifts_by_date_range(*date_range)

        if venue_id is not None:
            if not has_venue_access(actor, venue_id):
                raise ForbiddenError("You don't have access to this venue")
            return await self.storage.get_shifts_by_venue(venue_id)

        if employee_id is not None:
            if not owns_resource(actor, employee_id) and not has_permission(
                actor, SHIFT_POLICY.view_all
            ):
                raise ForbiddenError(
                    "You don't have permission to view other employees' shifts"
                )
            return await self.storage.get_shifts_by_employee(employee_id)

        if has_permission(actor, SHIFT_POLICY.view_all):
            return await self.storage.get_all_shifts()
        return await self.storage.get_shifts_by_employee(actor.id)

    async def get_shift(self, shift_id: int, actor: User) -> Shift:
        shift = await self._get_existing(shift_id)

        if not can_view_resource(actor, SHIFT_POLICY, shift.employeeId, shift.venueId):
            raise ForbiddenError("You don't have permission to view this shift")

        return shift

    async def create_shift(self, data: ShiftCreate, actor: User) -> Shift:
        """
        Create a shift.

        Requires MANAGE_ALL_SHIFTS, or MANAGE_VENUE_SHIFTS with access to the
        shift's venue.

        Raises:
            VenueNotFoundError: If the venue does not exist
            EmployeeNotFoundError: If the assigned employee does not exist
            ForbiddenError: If the actor may not manage shifts at the venue
        """
        await self._ensure_venue_exists(data.venueId)
        await self._ensure_employee_exists(data.employeeId)

        if not can_manage_resource(actor, SHIFT_POLICY, data.venueId):
            raise ForbiddenError(
                "You don't have permission to create shifts for this venue"
            )

        return await self.storage.create_shift(data.model_dump())

    async def update_shift(
        self, shift_id: int, data: ShiftUpdate, actor: User
    ) -> Shift:
        """
        Apply a partial update to a shift.

        Access is checked against the shift's current venue and, when the
        update moves the shift, against the destination venue as well.

        Raises:
            ShiftNotFoundError: If the shift does not exist
            VenueNotFoundError: If the destination venue does not exist
            ForbiddenError: If the actor may not manage either venue
            InvalidDataError: If the resulting times are out of order
        """
        existing = await self._get_existing(shift_id)

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in ("employeeId", "title", "notes")
        }
        new_venue_id = changes.get("venueId", existing.venueId)

        if new_venue_id != existing.venueId:
            await self._ensure_venue_exists(new_venue_id)
        if "employeeId" in changes:
            await self._ensure_employee_exists(changes["employeeId"])

        if not can_manage_resource(actor, SHIFT_POLICY, existing.venueId) or (
            not can_manage_resource(actor, SHIFT_POLICY, new_venue_id)
        ):
            raise ForbiddenError(
                "You don't have permission to update shifts for this venue"
            )

        start = changes.get("startTime", existing.startTime)
        end = changes.get("endTime", existing.endTime)
        if as_utc(end) <= as_utc(start):
            raise InvalidDataError("endTime must be after startTime")

        updated = await self.storage.update_shift(shift_id, changes)
        if not updated:
            raise ShiftNotFoundError()
        return updated

    async def delete_shift(self, shift_id: int, actor: User) -> None:
        existing = await self._get_existing(shift_id)

        if not can_manage_resource(actor, SHIFT_POLICY, existing.venueId):
            raise ForbiddenError(
                "You don't have permission to delete shifts for this venue"
            )

        if not await self.storage.delete_shift(shift_id):
            raise ShiftNotFoundError()
