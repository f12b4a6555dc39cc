# app/api/v1/endpoints/appointments.py
"""
Appointment booking between users and specialists.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from odmantic import AIOEngine

from app.core.security import Identity, get_identity
from app.db.session import get_engine
from app.domains.appointments import services as appointment_services
from app.domains.appointments.schemas import (
    AppointmentCreate,
    AppointmentDB,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    AvailabilityResponse,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/appointments", tags=["appointments"])


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    specialist_id: str = Query(..., alias="specialistId", min_length=1),
    date: str = Query(..., min_length=1),
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Hourly working slots for a specialist on a day, minus the start times
    already taken by pending or confirmed appointments.
    """
    day = appointment_services.parse_day(date)
    slots, booked = await appointment_services.get_availability(engine, specialist_id=specialist_id, day=day)
    return AvailabilityResponse(
        available_slots=slots,
        booked_appointments=[model_to_dto(a, AppointmentDB) for a in booked],
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    payload: AppointmentCreate,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    appointment = await appointment_services.book_appointment(
        engine, actor=identity, payload=payload, background_tasks=background_tasks
    )
    return AppointmentResponse(appointment=model_to_dto(appointment, AppointmentDB))


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    status_filter: str = Query(appointment_services.FILTER_ALL, alias="filter"),
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    appointments = await appointment_services.list_appointments(engine, actor=identity, status_filter=status_filter)
    return AppointmentListResponse(appointments=[model_to_dto(a, AppointmentDB) for a in appointments])


@router.patch("", response_model=AppointmentResponse)
async def update_appointment(
    payload: AppointmentUpdate,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    appointment = await appointment_services.update_appointment(
        engine, actor=identity, payload=payload, background_tasks=background_tasks
    )
    return AppointmentResponse(appointment=model_to_dto(appointment, AppointmentDB))


@router.delete("")
async def delete_appointment(
    id: str = Query(..., min_length=1),
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    await appointment_services.cancel_appointment(engine, actor=identity, appointment_id=id)
    return {"message": "Appointment deleted successfully"}
