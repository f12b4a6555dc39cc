from datetime import datetime
from typing import Optional

from pydantic import Field as PydField

from app.helpers.serialize import ApiSchema


class BrandingUpdate(ApiSchema):
    site_name: str = PydField(..., min_length=1)
    site_description: str = PydField(..., min_length=5)
    logo_url: Optional[str] = None
    logo_public_id: Optional[str] = None
    favicon_url: Optional[str] = None
    favicon_public_id: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class BrandingDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    site_name: str
    site_description: str
    logo_url: Optional[str] = None
    logo_public_id: Optional[str] = None
    favicon_url: Optional[str] = None
    favicon_public_id: Optional[str] = None
    primary_color: str
    secondary_color: str
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class BrandingResponse(ApiSchema):
    branding: BrandingDB


class BrandingUpdatedResponse(BrandingResponse):
    message: str
