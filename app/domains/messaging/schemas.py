from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field as PydField, field_validator

from app.helpers.serialize import ApiSchema


class MessageCreate(ApiSchema):
    """`recipient_id` is a user id or the literal "admin" (first admin found)."""
    recipient_id: str = PydField(..., min_length=1)
    content: str = PydField(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message content is required")
        return value


class MarkReadRequest(ApiSchema):
    conversation_id: Optional[str] = None
    mark_as_read: bool = False


class MessageDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    sender_id: str
    sender_name: str
    sender_role: Literal["admin", "user"]
    recipient_id: str
    recipient_name: str
    recipient_role: Literal["admin", "user"]
    content: str
    conversation_id: str
    is_read: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class MessageResponse(ApiSchema):
    message: MessageDB


class MessageListResponse(ApiSchema):
    messages: List[MessageDB]


class MarkReadResponse(ApiSchema):
    success: bool
    message: str
    modified_count: int
