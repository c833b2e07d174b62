import logging
from datetime import datetime
from typing import List, Optional, Tuple

from shiftsync.core.entities import Shift, TimeEntry, User, as_utc
from shiftsync.core.storage import MemStorage
from shiftsync.domains.time_entries.models import (
    EMPLOYEE_EDITABLE_FIELDS,
    TimeEntryCreate,
    TimeEntryUpdate,
)
from shiftsync.shared.exceptions import (
    EmployeeNotFoundError,
    ForbiddenError,
    InvalidDataError,
    ShiftNotFoundError,
    TimeEntryNotFoundError,
)
from shiftsync.shared.permissions import (
    TIME_ENTRY_POLICY,
    can_manage_resource,
    can_view_resource,
    has_permission,
    owns_resource,
)

logger = logging.getLogger(__name__)

VERIFY_DENIED_MESSAGE = (
    "Only managers with venue access or administrators can verify time entries"
)


def _check_clock_order(clock_in: datetime, clock_out: Optional[datetime]) -> None:
    if clock_out is not None and as_utc(clock_out) <= as_utc(clock_in):
        raise InvalidDataError("clockOut must be after clockIn")


class TimeEntryService:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def _get_with_shift(self, entry_id: int) -> Tuple[TimeEntry, Shift]:
        entry = await self.storage.get_time_entry(entry_id)
        if not entry:
            raise TimeEntryNotFoundError()

        shift = await self.storage.get_shift(entry.shiftId)
        if not shift:
            raise ShiftNotFoundError(associated=True)

        return entry, shift

    async def list_time_entries(
        self,
        actor: User,
        employee_id: Optional[int] = None,
        shift_id: Optional[int] = None,
        date_range: Optional[Tuple[datetime, datetime]] = None,
    ) -> List[TimeEntry]:
        """
        List time entries, applying the first filter given.

        Filter precedence: employee, shift, date range. Without a filter,
        VIEW_ALL_TIME holders get every entry and everyone else their own.
        """
        can_view_all = has_permission(actor, TIME_ENTRY_POLICY.view_all)

        if employee_id is not None:
            if not owns_resource(actor, employee_id) and not can_view_all:
                raise ForbiddenError(
                    "You don't have permission to view other employees' time entries"
                )
            return await self.storage.get_time_entries_by_employee(employee_id)

        if shift_id is not None:
            shift = await self.storage.get_shift(shift_id)
            if not shift:
                raise ShiftNotFoundError()
            if not can_view_resource(
                actor, TIME_ENTRY_POLICY, shift.employeeId, shift.venueId
            ):
                raise ForbiddenError(
                    "You don't have permission to view time entries for this shift"
                )
            return await self.storage.get_time_entries_by_shift(shift_id)

        if date_range is not None:
            if not can_view_all:
                raise ForbiddenError(
                    "You don't have permission to view all time entries"
                )
            return await self.storage.get_time_entries_by_date_range(*date_range)

        if can_view_all:
            return await self.storage.get_all_time_entries()
        return await self.storage.get_time_entries_by_employee(actor.id)

    async def get_time_entry(self, entry_id: int, actor: User) -> TimeEntry:
        entry, shift = await self._get_with_shift(entry_id)

        if not can_view_resource(
            actor, TIME_ENTRY_POLICY, entry.employeeId, shift.venueId
        ):
            raise ForbiddenError("You don't have permission to view this time entry")

        return entry

    async def create_time_entry(self, data: TimeEntryCreate, actor: User) -> TimeEntry:
        """
        Clock in, for oneself or, with time management rights, for someone else.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ShiftNotFoundError: If the shift does not exist
            ForbiddenError: If the actor may not record time for the employee,
                or tries to create an already verified entry without rights
            InvalidDataError: If clockOut is not after clockIn
        """
        if not await self.storage.get_user(data.employeeId):
            raise EmployeeNotFoundError()

        shift = await self.storage.get_shift(data.shiftId)
        if not shift:
            raise ShiftNotFoundError()

        is_manager = can_manage_resource(actor, TIME_ENTRY_POLICY, shift.venueId)
        if not owns_resource(actor, data.employeeId) and not is_manager:
            raise ForbiddenError(
                "You don't have permission to create time entries for this employee"
            )

        if data.verified and not is_manager:
            raise ForbiddenError(VERIFY_DENIED_MESSAGE)

        _check_clock_order(data.clockIn, data.clockOut)

        return await self.storage.create_time_entry(data.model_dump())

    async def update_time_entry(
        self, entry_id: int, data: TimeEntryUpdate, actor: User
    ) -> TimeEntry:
        """
        Apply a partial update to a time entry.

        Time managers for the shift's venue may change any field, including
        ``verified``. The owning employee may only change clockOut and notes,
        and only until the entry is verified.

        Raises:
            TimeEntryNotFoundError: If the entry does not exist
            ShiftNotFoundError: If the entry's shift no longer exists
            ForbiddenError: If the actor may not make this change
            InvalidDataError: If clockOut would not be after clockIn
        """
        entry, shift = await self._get_with_shift(entry_id)

        is_own = owns_resource(actor, entry.employeeId)
        is_manager = can_manage_resource(actor, TIME_ENTRY_POLICY, shift.venueId)

        if not is_own and not is_manager:
            raise ForbiddenError(
                "You don't have permission to update this time entry"
            )

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in ("clockOut", "notes", "coordinates")
        }

        if not is_manager:
            if entry.verified:
                raise ForbiddenError("Cannot modify a verified time entry")
            if changes.get("verified"):
                raise ForbiddenError(VERIFY_DENIED_MESSAGE)
            changes = {
                field: value
                for field, value in changes.items()
                if field in EMPLOYEE_EDITABLE_FIELDS
            }
        elif changes.get("verified") and not entry.verified:
            logger.info("User %s verified time entry %s", actor.id, entry_id)

        _check_clock_order(
            changes.get("clockIn", entry.clockIn),
            changes.get("clockOut", entry.clockOut),
        )

        updated = await self.storage.update_time_entry(entry_id, changes)
        if not updated:
            raise TimeEntryNotFoundError()
        return updated

    async def delete_time_entry(self, entry_id: int, actor: User) -> None:
        _, shift = await self._get_with_shift(entry_id)

        if not can_manage_resource(actor, TIME_ENTRY_POLICY, shift.venueId):
            raise ForbiddenError(
                "You don't have permission to delete this time entry"
            )

        if not await self.storage.delete_time_entry(entry_id):
            raise TimeEntryNotFoundError()
