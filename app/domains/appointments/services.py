"""
Appointment booking between users and specialists.

Availability is a fixed hourly grid (09:00-17:00) minus the start times of
active bookings on that calendar day. Booking conflicts are checked at day
granularity: any active booking for the specialist on the same day blocks a
new one, whatever the requested time. Like the consultation queue, the check
is find-then-insert and two concurrent bookings can both succeed.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from fastapi import BackgroundTasks
from odmantic import AIOEngine

from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.security import Identity
from app.domains.appointments.models import (
    ACTIVE_STATUSES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
    STATUS_REJECTED,
    AppointmentModel,
)
from app.domains.appointments.schemas import AppointmentCreate, AppointmentUpdate
from app.domains.notifications import services as notifications
from app.domains.users.models import ROLE_ADMIN
from app.domains.users.services import get_user_by_id
from app.helpers.serialize import parse_object_id, utc_naive, utcnow

logger = logging.getLogger(__name__)

# ------------------------------
# Constants
# ------------------------------
WORKDAY_START_HOUR = 9
WORKDAY_END_HOUR = 17
SLOT_MINUTES = 60
FILTER_ALL = "all"

ALL_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_CANCELLED, STATUS_REJECTED)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    STATUS_PENDING: frozenset({STATUS_CONFIRMED, STATUS_REJECTED}),
    STATUS_CONFIRMED: frozenset({STATUS_COMPLETED, STATUS_CANCELLED}),
    STATUS_COMPLETED: frozenset(),
    STATUS_CANCELLED: frozenset(),
    STATUS_REJECTED: frozenset(),
}


# ------------------------------
# Pure helpers
# ------------------------------

def parse_day(value: str) -> datetime:
    """
    Accept 'YYYY-MM-DD' or a full ISO datetime (a trailing 'Z' is allowed).
    Returns the value as naive UTC.
    """
    try:
        if len(value) == 10:
            return datetime.combine(date.fromisoformat(value), datetime.min.time())
        return utc_naive(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value}")


def day_bounds(moment: datetime) -> Tuple[datetime, datetime]:
    """[start, end) of the calendar day containing `moment`."""
    start = datetime.combine(moment.date(), datetime.min.time())
    return start, start + timedelta(days=1)


def working_slots() -> List[str]:
    slots = []
    minutes = WORKDAY_START_HOUR * 60
    while minutes < WORKDAY_END_HOUR * 60:
        slots.append(f"{minutes // 60:02d}:{minutes % 60:02d}")
        minutes += SLOT_MINUTES
    return slots


def available_slots(booked_start_times: Iterable[str]) -> List[str]:
    booked = set(booked_start_times)
    return [slot for slot in working_slots() if slot not in booked]


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


async def _get_appointment(engine: AIOEngine, appointment_id: str) -> AppointmentModel:
    obj_id = parse_object_id(appointment_id)
    appointment = None
    if obj_id is not None:
        appointment = await engine.find_one(AppointmentModel, AppointmentModel.id == obj_id)
    if appointment is None:
        logger.warning(f"Appointment not found for id={appointment_id}")
        raise NotFoundError("Appointment not found")
    return appointment


async def _active_bookings_on_day(engine: AIOEngine, specialist_id: str, moment: datetime) -> List[AppointmentModel]:
    start, end = day_bounds(moment)
    return await engine.find(
        AppointmentModel,
        AppointmentModel.specialist_id == specialist_id,
        AppointmentModel.appointment_date >= start,
        AppointmentModel.appointment_date < end,
        AppointmentModel.status.in_(list(ACTIVE_STATUSES)),
        sort=AppointmentModel.start_time,
    )


# ------------------------------
# Core Services
# ------------------------------

async def get_availability(
    engine: AIOEngine,
    *,
    specialist_id: str,
    day: datetime,
) -> Tuple[List[str], List[AppointmentModel]]:
    booked = await _active_bookings_on_day(engine, specialist_id, day)
    return available_slots(a.start_time for a in booked), booked


async def book_appointment(
    engine: AIOEngine,
    *,
    actor: Identity,
    payload: AppointmentCreate,
    background_tasks: Optional[BackgroundTasks] = None,
) -> AppointmentModel:
    specialist = await get_user_by_id(engine, payload.specialist_id)
    if specialist is None or specialist.role != ROLE_ADMIN:
        raise NotFoundError("Specialist not found")

    user = await get_user_by_id(engine, actor.id)
    user_name = user.name if user else actor.name
    user_email = user.email if user else actor.email

    appointment_date = utc_naive(payload.appointment_date)
    conflicts = await _active_bookings_on_day(engine, payload.specialist_id, appointment_date)
    if conflicts:
        logger.warning(
            f"Booking rejected: specialist {payload.specialist_id} already has "
            f"{len(conflicts)} active appointment(s) on {appointment_date.date()}"
        )
        raise ConflictError(
            "Specialist has a conflicting appointment at that time. Please choose another time."
        )

    now = utcnow()
    appointment = AppointmentModel(
        user_id=actor.id,
        user_name=user_name,
        user_email=user_email,
        specialist_id=payload.specialist_id,
        specialist_name=specialist.name,
        specialist_email=specialist.email,
        appointment_date=appointment_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        duration=payload.duration,
        consultation_type=payload.consultation_type,
        notes=payload.notes or "",
        timezone=payload.timezone,
        status=STATUS_PENDING,
        created_at=now,
        updated_at=now,
    )
    await engine.save(appointment)
    logger.info(f"Appointment id={appointment.id} booked by user_id={actor.id} with specialist_id={specialist.id}")

    day_label = appointment_date.strftime("%a %b %d %Y")
    await notifications.dispatch(
        background_tasks,
        specialist.email,
        "New Appointment Request",
        notifications.TEMPLATE_BOOKING,
        {
            "userName": user_name,
            "appointmentDate": day_label,
            "startTime": payload.start_time,
            "consultationType": payload.consultation_type,
            "notes": payload.notes,
        },
    )
    await notifications.dispatch(
        background_tasks,
        user_email,
        "Appointment Request Submitted",
        notifications.TEMPLATE_BOOKING,
        {
            "specialistName": specialist.name,
            "appointmentDate": day_label,
            "startTime": payload.start_time,
        },
    )
    return appointment


async def list_appointments(
    engine: AIOEngine,
    *,
    actor: Identity,
    status_filter: str = FILTER_ALL,
) -> List[AppointmentModel]:
    """
    Specialists (admins) see the appointments booked with them; users see their own.
    """
    if status_filter != FILTER_ALL and status_filter not in ALL_STATUSES:
        raise ValidationError(f"Invalid filter: {status_filter}")

    if actor.is_admin:
        filters = [AppointmentModel.specialist_id == actor.id]
    else:
        filters = [AppointmentModel.user_id == actor.id]
    if status_filter != FILTER_ALL:
        filters.append(AppointmentModel.status == status_filter)

    return await engine.find(AppointmentModel, *filters, sort=AppointmentModel.appointment_date.desc())


async def update_appointment(
    engine: AIOEngine,
    *,
    actor: Identity,
    payload: AppointmentUpdate,
    background_tasks: Optional[BackgroundTasks] = None,
) -> AppointmentModel:
    appointment = await _get_appointment(engine, payload.appointment_id)

    if actor.id not in (appointment.user_id, appointment.specialist_id):
        raise AuthorizationError("Unauthorized")

    previous = appointment.status
    if not ALLOWED_TRANSITIONS.get(previous):
        raise ConflictError(f"Appointment is already {previous} and can no longer be changed")
    changed = payload.status != previous
    if changed and not can_transition(previous, payload.status):
        raise ConflictError(f"Cannot change appointment status from {previous} to {payload.status}")

    appointment.status = payload.status
    if payload.admin_notes:
        appointment.admin_notes = payload.admin_notes
    if payload.meeting_link:
        appointment.meeting_link = payload.meeting_link
    appointment.updated_at = utcnow()
    await engine.save(appointment)
    logger.info(f"Appointment id={appointment.id} status {previous} -> {appointment.status} by {actor.id}")

    if changed:
        await _notify_status_change(appointment, payload, background_tasks)
    return appointment


async def _notify_status_change(
    appointment: AppointmentModel,
    payload: AppointmentUpdate,
    background_tasks: Optional[BackgroundTasks],
) -> None:
    day_label = appointment.appointment_date.strftime("%a %b %d %Y")
    if appointment.status == STATUS_CONFIRMED:
        await notifications.dispatch(
            background_tasks,
            appointment.user_email,
            "Appointment Confirmed",
            notifications.TEMPLATE_CONFIRMATION,
            {
                "specialistName": appointment.specialist_name,
                "appointmentDate": day_label,
                "startTime": appointment.start_time,
                "meetingLink": payload.meeting_link,
            },
        )
        await notifications.dispatch(
            background_tasks,
            appointment.specialist_email,
            "Appointment Confirmed",
            notifications.TEMPLATE_CONFIRMATION,
            {
                "userName": appointment.user_name,
                "appointmentDate": day_label,
                "startTime": appointment.start_time,
            },
        )
    elif appointment.status == STATUS_REJECTED:
        await notifications.dispatch(
            background_tasks,
            appointment.user_email,
            "Appointment Request Rejected",
            notifications.TEMPLATE_REJECTION,
            {"specialistName": appointment.specialist_name, "reason": payload.admin_notes},
        )
    elif appointment.status == STATUS_CANCELLED:
        await notifications.dispatch(
            background_tasks,
            appointment.specialist_email,
            "Appointment Cancelled",
            notifications.TEMPLATE_REJECTION,
            {"userName": appointment.user_name, "appointmentDate": day_label},
        )


async def cancel_appointment(engine: AIOEngine, *, actor: Identity, appointment_id: str) -> None:
    """
    Remove a booking. Only the user who booked it may do this.
    """
    appointment = await _get_appointment(engine, appointment_id)
    if appointment.user_id != actor.id:
        raise AuthorizationError("Unauthorized")
    await engine.delete(appointment)
    logger.info(f"Appointment id={appointment_id} deleted by user_id={actor.id}")
