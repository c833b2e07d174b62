from typing import List

from fastapi import APIRouter, Depends, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import Message, User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.messages.models import MessageCreate, MessageUpdate
from shiftsync.domains.messages.service import (
    get_messages_for_user,
    get_unread_messages,
    send_message,
    update_message,
)
from shiftsync.shared.permissions import require_authenticated

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=List[Message], operation_id="getMessages")
async def list_messages(
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> List[Message]:
    return await get_messages_for_user(user, storage)


@router.get("/unread", response_model=List[Message], operation_id="getUnreadMessages")
async def list_unread_messages(
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> List[Message]:
    return await get_unread_messages(user, storage)


@router.post(
    "",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    operation_id="sendMessage",
)
async def create_message(
    data: MessageCreate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> Message:
    return await send_message(data, user, storage)


@router.patch("/{id}", response_model=Message, operation_id="updateMessage")
async def patch_message(
    id: int,
    data: MessageUpdate,
    user: User = Depends(require_authenticated),
    storage: MemStorage = Depends(get_storage),
) -> Message:
    return await update_message(id, data, user, storage)
