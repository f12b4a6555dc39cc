# app/api/v1/endpoints/messages.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from odmantic import AIOEngine

from app.core.exceptions import ValidationError
from app.core.security import Identity, get_identity
from app.db.session import get_engine
from app.domains.messaging import services as messaging_services
from app.domains.messaging.schemas import (
    MarkReadRequest,
    MarkReadResponse,
    MessageCreate,
    MessageDB,
    MessageListResponse,
    MessageResponse,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: MessageCreate,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    message = await messaging_services.send_message(
        engine, actor=identity, recipient=payload.recipient_id, content=payload.content
    )
    return MessageResponse(message=model_to_dto(message, MessageDB))


@router.get("", response_model=MessageListResponse)
async def list_messages(
    conversation_id: Optional[str] = Query(None, alias="conversationId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    messages = await messaging_services.list_messages(
        engine,
        actor=identity,
        conversation_id=conversation_id,
        counterpart_user_id=user_id,
    )
    return MessageListResponse(messages=[model_to_dto(m, MessageDB) for m in messages])


@router.patch("", response_model=MarkReadResponse)
async def mark_messages_read(
    payload: MarkReadRequest,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    if not payload.conversation_id:
        raise ValidationError("Conversation ID is required")
    if not payload.mark_as_read:
        raise ValidationError("No operation specified")

    modified = await messaging_services.mark_read(
        engine, actor=identity, conversation_id=payload.conversation_id
    )
    return MarkReadResponse(success=True, message="Messages marked as read", modified_count=modified)
