from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import TillVerification, User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.till_verifications.models import (
    TillVerificationCreate,
    TillVerificationUpdate,
)
from shiftsync.domains.till_verifications.service import TillVerificationService
from shiftsync.shared.permissions import require_authenticated
from shiftsync.shared.validators import parse_date_range, parse_id_param

router = APIRouter(prefix="/till-verifications", tags=["Till Verifications"])


@router.get(
    "", response_model=List[TillVerification], operation_id="getTillVerifications"
)
async def list_till_verifications(
    shiftId: Optional[str] = None,
    employeeId: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> List[TillVerification]:
    return await TillVerificationService(storage).list_till_verifications(
        user,
        shift_id=parse_id_param(shiftId, "shift"),
        employee_id=parse_id_param(employeeId, "employee"),
        date_range=parse_date_range(startDate, endDate),
    )


@router.post(
    "",
    response_model=TillVerification,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTillVerification",
)
async def create_till_verification(
    data: TillVerificationCreate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TillVerification:
    return await TillVerificationService(storage).create_till_verification(data, user)


@router.get(
    "/{id}", response_model=TillVerification, operation_id="getTillVerification"
)
async def get_till_verification(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TillVerification:
    return await TillVerificationService(storage).get_till_verification(id, user)


@router.patch(
    "/{id}", response_model=TillVerification, operation_id="updateTillVerification"
)
async def update_till_verification(
    id: int,
    data: TillVerificationUpdate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> TillVerification:
    """
    Update a till verification.

    Send ``verifiedBy`` or ``verifiedAt`` to verify; only till managers for
    the venue and administrators can do so.
    """
    return await TillVerificationService(storage).update_till_verification(
        id, data, user
    )


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="deleteTillVerification",
)
async def delete_till_verification(
    id: int,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> None:
    await TillVerificationService(storage).delete_till_verification(id, user)
