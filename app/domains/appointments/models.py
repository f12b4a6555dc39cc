from datetime import datetime
from typing import Optional

from odmantic import Field as OdmField, Model

STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUS_REJECTED = "rejected"

# Bookings that still occupy the specialist's calendar
ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)


class AppointmentModel(Model):
    """
    A booked slot between a user and a specialist (admin).
    Names and e-mails are copied at booking time and are not kept in sync
    with later profile edits.
    """
    user_id: str
    user_name: str
    user_email: str
    specialist_id: str
    specialist_name: str
    specialist_email: str
    appointment_date: datetime
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    duration: int = OdmField(default=60)  # minutes
    consultation_type: str = OdmField(default="initial")  # initial | follow-up | check-in
    status: str = OdmField(default=STATUS_PENDING)
    notes: str = OdmField(default="")
    admin_notes: Optional[str] = OdmField(default=None)
    user_notes: Optional[str] = OdmField(default=None)
    specialist_notes: Optional[str] = OdmField(default=None)
    timezone: str = OdmField(default="UTC")
    meeting_link: Optional[str] = OdmField(default=None)
    reminder_sent: bool = OdmField(default=False)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "appointments"}
