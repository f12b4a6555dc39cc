from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field as PydField

from app.helpers.serialize import ApiSchema

ConsultationType = Literal["initial", "follow-up", "specific-concern"]
Urgency = Literal["low", "medium", "high"]


class ConsultationRequestCreate(ApiSchema):
    consultation_type: ConsultationType
    goals: str = PydField(..., min_length=10)
    urgency: Urgency = "medium"
    notes: Optional[str] = None


class ConsultationDecision(ApiSchema):
    """
    Admin decision on a pending request.
    `action` stays a plain string so an unknown value is reported by the
    service with a specific message instead of a schema error.
    """
    request_id: str = PydField(..., min_length=1)
    action: str = PydField(..., min_length=1)
    specialist_id: Optional[str] = None
    reason: Optional[str] = None


class ConsultationRequestDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    user_id: str
    user_name: str
    user_email: str
    consultation_type: ConsultationType
    goals: str
    urgency: Urgency
    notes: Optional[str] = None
    status: Literal["pending", "assigned", "rejected"]
    assigned_specialist_id: Optional[str] = None
    assigned_specialist_name: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ConsultationRequestListResponse(ApiSchema):
    requests: List[ConsultationRequestDB]
