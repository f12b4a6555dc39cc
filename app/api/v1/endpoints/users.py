# app/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends
from odmantic import AIOEngine

from app.core.exceptions import NotFoundError
from app.core.security import Identity, get_identity
from app.db.session import get_engine
from app.domains.users import services as user_services
from app.domains.users.schemas import (
    ProfileResponse,
    ProfileSchema,
    SpecialistListResponse,
    UserPublic,
    UserSummary,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(identity: Identity = Depends(get_identity), engine: AIOEngine = Depends(get_engine)):
    user = await user_services.get_user_by_id(engine, identity.id)
    if user is None:
        raise NotFoundError("User not found")
    return ProfileResponse(user=model_to_dto(user, UserPublic))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileSchema,
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    user = await user_services.update_profile(engine, user_id=identity.id, payload=payload)
    return ProfileResponse(user=model_to_dto(user, UserPublic))


@router.get("/specialists", response_model=SpecialistListResponse)
async def list_specialists(
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    """Admins double as the specialists a user can book with."""
    specialists = await user_services.list_specialists(engine)
    return SpecialistListResponse(
        specialists=[UserSummary(id=str(s.id), name=s.name, email=s.email) for s in specialists]
    )
