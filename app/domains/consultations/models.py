from datetime import datetime
from typing import Optional

from odmantic import Field as OdmField, Model

STATUS_PENDING = "pending"
STATUS_ASSIGNED = "assigned"
STATUS_REJECTED = "rejected"


class ConsultationRequestModel(Model):
    """
    A user's ask to be paired with a specialist.
    pending -> assigned | rejected; both outcomes are terminal.
    user_name/user_email and assigned_specialist_name are copies taken at write time.
    """
    user_id: str
    user_name: str
    user_email: str
    consultation_type: str  # initial | follow-up | specific-concern
    goals: str
    urgency: str = OdmField(default="medium")  # low | medium | high
    notes: Optional[str] = OdmField(default=None)
    status: str = OdmField(default=STATUS_PENDING)
    assigned_specialist_id: Optional[str] = OdmField(default=None)
    assigned_specialist_name: Optional[str] = OdmField(default=None)
    rejection_reason: Optional[str] = OdmField(default=None)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "consultation_requests"}
