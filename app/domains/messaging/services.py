"""
Two-party messaging keyed by a derived conversation id.
"""

import logging
from typing import List, Optional

from odmantic import AIOEngine, query

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.core.security import Identity
from app.domains.messaging.models import MessageModel
from app.domains.users.models import ROLE_ADMIN, ROLE_USER, UserModel
from app.domains.users.services import get_user_by_id
from app.helpers.serialize import utcnow

logger = logging.getLogger(__name__)

# Recipient token resolving to whichever admin is found first, not a specific agent
ADMIN_RECIPIENT = "admin"


def conversation_id_for(first_id: str, second_id: str) -> str:
    """Thread key that is the same whichever side sends."""
    low, high = sorted((first_id, second_id))
    return f"{low}-{high}"


def is_participant(conversation_id: str, user_id: str) -> bool:
    return user_id in conversation_id.split("-")


async def send_message(
    engine: AIOEngine,
    *,
    actor: Identity,
    recipient: str,
    content: str,
) -> MessageModel:
    if not content or not content.strip():
        raise ValidationError("Message content is required")

    if recipient == ADMIN_RECIPIENT:
        target = await engine.find_one(UserModel, UserModel.role == ROLE_ADMIN)
        if target is None:
            raise NotFoundError("Admin not found")
    else:
        target = await get_user_by_id(engine, recipient)
        if target is None:
            raise NotFoundError("Recipient not found")

    recipient_id = str(target.id)
    now = utcnow()
    message = MessageModel(
        sender_id=actor.id,
        sender_name=actor.name or "User",
        sender_role=actor.role or ROLE_USER,
        recipient_id=recipient_id,
        recipient_name=target.name,
        recipient_role=target.role,
        content=content,
        conversation_id=conversation_id_for(actor.id, recipient_id),
        is_read=False,
        created_at=now,
        updated_at=now,
    )
    await engine.save(message)
    logger.info(f"Message id={message.id} sent in conversation {message.conversation_id}")
    return message


async def mark_read(engine: AIOEngine, *, actor: Identity, conversation_id: str) -> int:
    """
    Flag every unread message addressed to the actor in the thread as read.
    Returns the number of documents modified; a repeat call modifies none.
    """
    collection = engine.get_collection(MessageModel)
    result = await collection.update_many(
        query.and_(
            MessageModel.conversation_id == conversation_id,
            MessageModel.recipient_id == actor.id,
            MessageModel.is_read == False,  # noqa: E712
        ),
        {"$set": {+MessageModel.is_read: True, +MessageModel.updated_at: utcnow()}},
    )
    if result.modified_count:
        logger.info(f"Marked {result.modified_count} message(s) read in {conversation_id} for {actor.id}")
    return result.modified_count


async def _read_thread(engine: AIOEngine, actor: Identity, conversation_id: str) -> List[MessageModel]:
    messages = await engine.find(
        MessageModel,
        MessageModel.conversation_id == conversation_id,
        sort=MessageModel.created_at,
    )
    await mark_read(engine, actor=actor, conversation_id=conversation_id)
    return messages


async def list_messages(
    engine: AIOEngine,
    *,
    actor: Identity,
    conversation_id: Optional[str] = None,
    counterpart_user_id: Optional[str] = None,
) -> List[MessageModel]:
    """
    Three read modes:
    - conversation_id: that thread, oldest first (participants and admins only)
    - counterpart_user_id: the thread between the actor and that user
    - neither: admins get every message addressed to an admin, newest first;
      users get all of their own messages, oldest first

    Reading a thread marks the actor's unread messages in it as read. The
    returned documents are the state before that update.
    """
    if conversation_id:
        if not actor.is_admin and not is_participant(conversation_id, actor.id):
            raise AuthorizationError("Not a participant in this conversation")
        return await _read_thread(engine, actor, conversation_id)

    if counterpart_user_id:
        return await _read_thread(engine, actor, conversation_id_for(actor.id, counterpart_user_id))

    if actor.is_admin:
        return await engine.find(
            MessageModel,
            MessageModel.recipient_role == ROLE_ADMIN,
            sort=MessageModel.created_at.desc(),
        )

    return await engine.find(
        MessageModel,
        query.or_(MessageModel.sender_id == actor.id, MessageModel.recipient_id == actor.id),
        sort=MessageModel.created_at,
    )
