"""
Consultation request workflow: a user asks for a specialist, an admin
assigns one or rejects the request.

Known race: the "one pending request per user" rule is a find-then-insert.
Two concurrent submissions can both pass the check; nothing at the storage
layer prevents the duplicate.
"""

import logging
from typing import List

from odmantic import AIOEngine

from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.security import Identity
from app.domains.consultations.models import (
    STATUS_ASSIGNED,
    STATUS_PENDING,
    STATUS_REJECTED,
    ConsultationRequestModel,
)
from app.domains.consultations.schemas import ConsultationDecision, ConsultationRequestCreate
from app.domains.users.services import get_user_by_id
from app.helpers.serialize import parse_object_id, utcnow

logger = logging.getLogger(__name__)

ACTION_ASSIGN = "assign"
ACTION_REJECT = "reject"
DEFAULT_REJECTION_REASON = "Request rejected"


async def submit_request(
    engine: AIOEngine,
    *,
    actor: Identity,
    payload: ConsultationRequestCreate,
) -> ConsultationRequestModel:
    existing = await engine.find_one(
        ConsultationRequestModel,
        ConsultationRequestModel.user_id == actor.id,
        ConsultationRequestModel.status == STATUS_PENDING,
    )
    if existing:
        logger.warning(f"User {actor.id} already has pending consultation request {existing.id}")
        # The web client expects 400 for this case
        raise ConflictError("You already have a pending consultation request", status_code=400)

    now = utcnow()
    request = ConsultationRequestModel(
        user_id=actor.id,
        user_name=actor.name or "User",
        user_email=actor.email,
        consultation_type=payload.consultation_type,
        goals=payload.goals,
        urgency=payload.urgency,
        notes=payload.notes,
        status=STATUS_PENDING,
        created_at=now,
        updated_at=now,
    )
    await engine.save(request)
    logger.info(f"Consultation request id={request.id} created for user_id={actor.id}")
    return request


async def list_requests(engine: AIOEngine, *, actor: Identity) -> List[ConsultationRequestModel]:
    """
    Admins see the pending queue; users see their own history.
    """
    if actor.is_admin:
        query = ConsultationRequestModel.status == STATUS_PENDING
    else:
        query = ConsultationRequestModel.user_id == actor.id
    return await engine.find(
        ConsultationRequestModel,
        query,
        sort=ConsultationRequestModel.created_at.desc(),
    )


async def decide_request(
    engine: AIOEngine,
    *,
    actor: Identity,
    payload: ConsultationDecision,
) -> ConsultationRequestModel:
    if not actor.is_admin:
        raise AuthorizationError("Admin access required")

    obj_id = parse_object_id(payload.request_id)
    request = None
    if obj_id is not None:
        request = await engine.find_one(ConsultationRequestModel, ConsultationRequestModel.id == obj_id)
    if request is None:
        raise NotFoundError("Request not found")

    if payload.action not in (ACTION_ASSIGN, ACTION_REJECT):
        raise ValidationError("Invalid action")

    if request.status != STATUS_PENDING:
        raise ConflictError(f"Request is already {request.status}")

    if payload.action == ACTION_ASSIGN:
        if not payload.specialist_id:
            raise ValidationError("Specialist ID is required")
        specialist = await get_user_by_id(engine, payload.specialist_id)
        if specialist is None:
            raise NotFoundError("Specialist not found")
        request.status = STATUS_ASSIGNED
        request.assigned_specialist_id = payload.specialist_id
        request.assigned_specialist_name = specialist.name
    else:
        request.status = STATUS_REJECTED
        request.rejection_reason = payload.reason or DEFAULT_REJECTION_REASON

    request.updated_at = utcnow()
    await engine.save(request)
    logger.info(f"Consultation request id={request.id} {request.status} by admin {actor.id}")
    return request
