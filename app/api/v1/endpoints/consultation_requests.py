# app/api/v1/endpoints/consultation_requests.py
from fastapi import APIRouter, Depends, status
from odmantic import AIOEngine

from app.core.security import Identity, get_identity
from app.db.session import get_engine
from app.domains.consultations import services as consultation_services
from app.domains.consultations.schemas import (
    ConsultationDecision,
    ConsultationRequestCreate,
    ConsultationRequestDB,
    ConsultationRequestListResponse,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1", tags=["consultation-requests"])


@router.post(
    "/consultation-request",
    response_model=ConsultationRequestDB,
    status_code=status.HTTP_201_CREATED,
)
async def create_consultation_request(
    payload: ConsultationRequestCreate,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Ask for a specialist. A user may only have one pending request at a time.
    """
    request = await consultation_services.submit_request(engine, actor=identity, payload=payload)
    return model_to_dto(request, ConsultationRequestDB)


@router.get("/consultation-request", response_model=ConsultationRequestListResponse)
async def list_consultation_requests(
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    requests = await consultation_services.list_requests(engine, actor=identity)
    return ConsultationRequestListResponse(
        requests=[model_to_dto(r, ConsultationRequestDB) for r in requests]
    )


@router.patch("/consultation-request", response_model=ConsultationRequestDB)
async def decide_consultation_request(
    payload: ConsultationDecision,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Admin decision on a pending request: assign a specialist or reject it.
    """
    request = await consultation_services.decide_request(engine, actor=identity, payload=payload)
    return model_to_dto(request, ConsultationRequestDB)
