from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field as PydField

from app.helpers.serialize import ApiSchema

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled", "rejected"]
AppointmentType = Literal["initial", "follow-up", "check-in"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AppointmentCreate(ApiSchema):
    specialist_id: str = PydField(..., min_length=1)
    appointment_date: datetime
    start_time: str = PydField(..., pattern=TIME_PATTERN)
    end_time: str = PydField(..., pattern=TIME_PATTERN)
    duration: int = PydField(..., ge=15, le=480)
    consultation_type: AppointmentType
    notes: Optional[str] = None
    timezone: str = "UTC"


class AppointmentUpdate(ApiSchema):
    appointment_id: str = PydField(..., min_length=1)
    status: AppointmentStatus
    admin_notes: Optional[str] = None
    meeting_link: Optional[str] = None


class AppointmentDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    user_id: str
    user_name: str
    user_email: str
    specialist_id: str
    specialist_name: str
    specialist_email: str
    appointment_date: datetime
    start_time: str
    end_time: str
    duration: int
    consultation_type: AppointmentType
    status: AppointmentStatus
    notes: str = ""
    admin_notes: Optional[str] = None
    user_notes: Optional[str] = None
    specialist_notes: Optional[str] = None
    timezone: str = "UTC"
    meeting_link: Optional[str] = None
    reminder_sent: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None


class AppointmentResponse(ApiSchema):
    appointment: AppointmentDB


class AppointmentListResponse(ApiSchema):
    appointments: List[AppointmentDB]


class AvailabilityResponse(ApiSchema):
    available_slots: List[str]
    booked_appointments: List[AppointmentDB]
