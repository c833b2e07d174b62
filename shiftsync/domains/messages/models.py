from typing import Optional

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    receiverId: Optional[int] = None  # Omit to broadcast to everyone
    content: str = Field(..., min_length=1)


class MessageUpdate(BaseModel):
    """Only the read flag of a message can change."""

    isRead: bool
