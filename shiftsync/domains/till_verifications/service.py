import logging
from datetime import datetime
from typing import List, Optional, Tuple

from shiftsync.core.entities import Shift, TillVerification, User, utcnow
from shiftsync.core.storage import MemStorage
from shiftsync.domains.till_verifications.models import (
    TillVerificationCreate,
    TillVerificationUpdate,
)
from shiftsync.shared.exceptions import (
    EmployeeNotFoundError,
    ForbiddenError,
    ShiftNotFoundError,
    TillVerificationNotFoundError,
)
from shiftsync.shared.permissions import (
    TILL_POLICY,
    can_manage_resource,
    can_view_resource,
    has_permission,
    owns_resource,
)

logger = logging.getLogger(__name__)

VERIFY_DENIED_MESSAGE = (
    "Only managers with venue access or administrators can verify tills"
)


def _is_verify_request(data: TillVerificationUpdate) -> bool:
    fields = data.model_fields_set
    return bool(data.verifiedBy) or (
        "verifiedAt" in fields and data.verifiedAt is not None
    )


class TillVerificationService:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def _get_with_shift(
        self, verification_id: int
    ) -> Tuple[TillVerification, Shift]:
        verification = await self.storage.get_till_verification(verification_id)
        if not verification:
            raise TillVerificationNotFoundError()

        shift = await self.storage.get_shift(verification.shiftId)
        if not shift:
            raise ShiftNotFoundError(associated=True)

        return verification, shift

    async def list_till_verifications(
        self,
        actor: User,
        shift_id: Optional[int] = None,
        employee_id: Optional[int] = None,
        date_range: Optional[Tuple[datetime, datetime]] = None,
    ) -> List[TillVerification]:
        """
        List till verifications, applying the first filter given.

        Filter precedence: shift, employee, date range. Without a filter,
        VIEW_ALL_TILLS holders get the complete set and everyone else their
        own records.
        """
        can_view_all = has_permission(actor, TILL_POLICY.view_all)

        if shift_id is not None:
            shift = await self.storage.get_shift(shift_id)
            if not shift:
                raise ShiftNotFoundError()
            if not can_view_resource(actor, TILL_POLICY, shift.employeeId, shift.venueId):
                raise ForbiddenError(
                    "You don't have permission to view till verifications for this shift"
                )
            return await self.storage.get_till_verifications_by_shift(shift_id)

        if employee_id is not None:
            if not owns_resource(actor, employee_id) and not can_view_all:
                raise ForbiddenError(
                    "You don't have permission to view other employees' till verifications"
                )
            return await self.storage.get_till_verifications_by_employee(employee_id)

        if date_range is not None:
            if not can_view_all:
                raise ForbiddenError(
                    "You don't have permission to view all till verifications"
                )
            return await self.storage.get_till_verifications_by_date_range(*date_range)

        if can_view_all:
            return await self.storage.get_all_till_verifications()
        return await self.storage.get_till_verifications_by_employee(actor.id)

    async def get_till_verification(
        self, verification_id: int, actor: User
    ) -> TillVerification:
        verification, shift = await self._get_with_shift(verification_id)

        if not can_view_resource(
            actor, TILL_POLICY, verification.employeeId, shift.venueId
        ):
            raise ForbiddenError(
                "You don't have permission to view this till verification"
            )

        return verification

    async def create_till_verification(
        self, data: TillVerificationCreate, actor: User
    ) -> TillVerification:
        """
        Record an end-of-shift till count.

        Employees submit their own counts unverified. A till manager for the
        shift's venue may submit on anyone's behalf, and their submissions
        are verified on creation.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ShiftNotFoundError: If the shift does not exist
            ForbiddenError: If the actor may not submit for the employee
        """
        if not await self.storage.get_user(data.employeeId):
            raise EmployeeNotFoundError()

        shift = await self.storage.get_shift(data.shiftId)
        if not shift:
            raise ShiftNotFoundError()

        is_manager = can_manage_resource(actor, TILL_POLICY, shift.venueId)
        if not owns_resource(actor, data.employeeId) and not is_manager:
            raise ForbiddenError(
                "You don't have permission to create till verifications for this employee"
            )

        record = data.model_dump()
        if is_manager:
            record["verifiedBy"] = actor.id

        return await self.storage.create_till_verification(record)

    async def update_till_verification(
        self, verification_id: int, data: TillVerificationUpdate, actor: User
    ) -> TillVerification:
        """
        Apply a partial update to a till verification.

        The owning employee may only edit notes, and only until the record is
        verified. Verifying is reserved for till managers of the shift's venue.

        Raises:
            TillVerificationNotFoundError: If the record does not exist
            ShiftNotFoundError: If the record's shift no longer exists
            ForbiddenError: If the actor may not make this change
        """
        verification, shift = await self._get_with_shift(verification_id)

        is_own = owns_resource(actor, verification.employeeId)
        is_manager = can_manage_resource(actor, TILL_POLICY, shift.venueId)

        if not is_own and not is_manager:
            raise ForbiddenError(
                "You don't have permission to update this till verification"
            )

        if not is_manager:
            if verification.verifiedBy is not None:
                raise ForbiddenError("Cannot modify a verified till report")
            if _is_verify_request(data):
                raise ForbiddenError(VERIFY_DENIED_MESSAGE)
            changes = {"notes": data.notes} if "notes" in data.model_fields_set else {}
        else:
            changes = {
                field: value
                for field, value in data.model_dump(
                    exclude_unset=True, exclude={"verifiedBy", "verifiedAt"}
                ).items()
                if value is not None or field == "notes"
            }
            if _is_verify_request(data):
                changes["verifiedBy"] = actor.id
                changes["verifiedAt"] = utcnow()
                logger.info(
                    "User %s verified till verification %s", actor.id, verification_id
                )

        updated = await self.storage.update_till_verification(verification_id, changes)
        if not updated:
            raise TillVerificationNotFoundError()
        return updated

    async def delete_till_verification(self, verification_id: int, actor: User) -> None:
        _, shift = await self._get_with_shift(verification_id)

        if not can_manage_resource(actor, TILL_POLICY, shift.venueId):
            raise ForbiddenError(
                "You don't have permission to delete this till verification"
            )

        if not await self.storage.delete_till_verification(verification_id):
            raise TillVerificationNotFoundError()
