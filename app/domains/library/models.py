from datetime import datetime
from typing import List, Optional

from odmantic import Field as OdmField, Model


class CategoryModel(Model):
    """
    Resource category. `name_ar`/`description_ar` are machine translations
    filled on create/update (fall back to the source text).
    Unique indexes on name and slug are created at startup.
    """
    name: str
    name_ar: Optional[str] = None
    slug: str
    description: str
    description_ar: Optional[str] = None
    icon: str = OdmField(default="📁")
    color: str = OdmField(default="#4f46e5")
    order: int = OdmField(default=0)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "categories"}


class ContentModel(Model):
    """Published resource: video, post or infographic. `category` holds a category slug."""
    title: str
    type: str  # video | post | infographic
    description: str
    media_url: str
    content: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = OdmField(default_factory=list)
    created_at: datetime = OdmField(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = OdmField(default=None)

    model_config = {"collection": "contents"}
