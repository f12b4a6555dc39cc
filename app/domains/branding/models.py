from datetime import datetime
from typing import Optional

from odmantic import Field as OdmField, Model

DEFAULT_SITE_NAME = "NutriÉd"
DEFAULT_SITE_DESCRIPTION = "Plateforme de nutrition personnalisée"


class BrandingModel(Model):
    """Site-wide branding. A single document; created with defaults on first read."""
    site_name: str = OdmField(default=DEFAULT_SITE_NAME)
    site_description: str = OdmField(default=DEFAULT_SITE_DESCRIPTION)
    logo_url: Optional[str] = None
    logo_public_id: Optional[str] = None
    favicon_url: Optional[str] = None
    favicon_public_id: Optional[str] = None
    primary_color: str = OdmField(default="#4F46E5")
    secondary_color: str = OdmField(default="#A855F7")
    updated_by: Optional[str] = None
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "branding"}
