from typing import List

from shiftsync.core.entities import Message, User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.messages.models import MessageCreate, MessageUpdate
from shiftsync.shared.exceptions import (
    ForbiddenError,
    MessageNotFoundError,
    UserNotFoundError,
)
from shiftsync.shared.permissions import Permission, has_permission


async def get_messages_for_user(actor: User, storage: MemStorage) -> List[Message]:
    """Messages the actor sent, received, or that were broadcast."""
    return await storage.get_messages_by_user(actor.id)


async def get_unread_messages(actor: User, storage: MemStorage) -> List[Message]:
    return await storage.get_unread_messages(actor.id)


async def send_message(
    data: MessageCreate, actor: User, storage: MemStorage
) -> Message:
    """
    Send a message as the acting user.

    The sender is always the actor. A message without a receiver is a
    broadcast and needs SEND_MASS_MESSAGES.

    Raises:
        ForbiddenError: If a broadcast is sent without SEND_MASS_MESSAGES
        UserNotFoundError: If the receiver does not exist
    """
    if data.receiverId is None:
        if not has_permission(actor, Permission.SEND_MASS_MESSAGES):
            raise ForbiddenError(
                "You don't have permission to send messages to all users"
            )
    elif not await storage.get_user(data.receiverId):
        raise UserNotFoundError()

    return await storage.create_message(
        {"senderId": actor.id, "receiverId": data.receiverId, "content": data.content}
    )


async def update_message(
    message_id: int, data: MessageUpdate, actor: User, storage: MemStorage
) -> Message:
    """
    Mark a message read or unread.

    Only a recipient can do this: the named receiver, or anyone for a
    broadcast.
    """
    message = await storage.get_message(message_id)
    if not message:
        raise MessageNotFoundError()

    if message.receiverId is not None and message.receiverId != actor.id:
        raise ForbiddenError("You don't have permission to update this message")

    updated = await storage.update_message(message_id, {"isRead": data.isRead})
    if not updated:
        raise MessageNotFoundError()
    return updated
