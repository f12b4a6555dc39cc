from datetime import datetime
from typing import Optional

from odmantic import Field as OdmField, Model


class MessageModel(Model):
    """
    One message in a two-party thread. Immutable after creation except `is_read`.
    """
    sender_id: str
    sender_name: str
    sender_role: str  # admin | user
    recipient_id: str
    recipient_name: str
    recipient_role: str  # admin | user
    content: str
    conversation_id: str
    is_read: bool = OdmField(default=False)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "messages"}
