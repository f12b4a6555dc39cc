# app/api/v1/endpoints/branding.py
from fastapi import APIRouter, Depends
from odmantic import AIOEngine

from app.core.security import Identity, require_admin
from app.db.session import get_engine
from app.domains.branding import services as branding_services
from app.domains.branding.schemas import BrandingDB, BrandingResponse, BrandingUpdate, BrandingUpdatedResponse
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/admin/branding", tags=["branding"])


@router.get("", response_model=BrandingResponse)
async def get_branding(engine: AIOEngine = Depends(get_engine)):
    """Public: the site name, logo and colours shown by every page."""
    branding = await branding_services.get_branding(engine)
    return BrandingResponse(branding=model_to_dto(branding, BrandingDB))


@router.put("", response_model=BrandingUpdatedResponse)
async def update_branding(
    payload: BrandingUpdate,
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    branding = await branding_services.update_branding(engine, actor=admin, payload=payload)
    return BrandingUpdatedResponse(
        message="Branding updated successfully",
        branding=model_to_dto(branding, BrandingDB),
    )
