import logging

from odmantic import AIOEngine

from app.core.security import Identity
from app.domains.branding.models import BrandingModel
from app.domains.branding.schemas import BrandingUpdate
from app.helpers.serialize import utcnow

logger = logging.getLogger(__name__)


async def get_branding(engine: AIOEngine) -> BrandingModel:
    branding = await engine.find_one(BrandingModel)
    if branding is None:
        branding = BrandingModel()
        await engine.save(branding)
        logger.info("Default branding created")
    return branding


async def update_branding(engine: AIOEngine, *, actor: Identity, payload: BrandingUpdate) -> BrandingModel:
    branding = await get_branding(engine)
    # Colours left out keep their current value; logo/favicon fields may be cleared with null
    branding.model_update(payload.model_dump(exclude_unset=True, exclude={"primary_color", "secondary_color"}))
    if payload.primary_color:
        branding.primary_color = payload.primary_color
    if payload.secondary_color:
        branding.secondary_color = payload.secondary_color
    branding.updated_by = actor.id
    branding.updated_at = utcnow()
    await engine.save(branding)
    logger.info(f"Branding updated by {actor.id}")
    return branding
