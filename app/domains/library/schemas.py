from datetime import datetime
from typing import List, Literal, Optional

from pydantic import AnyHttpUrl, Field as PydField

from app.helpers.serialize import ApiSchema

ContentType = Literal["video", "post", "infographic"]

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


# ------------------------------
# Categories
# ------------------------------
class CategoryCreate(ApiSchema):
    name: str = PydField(..., min_length=1, max_length=100)
    description: str = PydField(..., min_length=1, max_length=500)
    icon: str = "📁"
    color: str = PydField(default="#4f46e5", pattern=HEX_COLOR_PATTERN)
    order: int = 0


class CategoryDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    name: str
    name_ar: Optional[str] = None
    slug: str
    description: str
    description_ar: Optional[str] = None
    icon: str
    color: str
    order: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class CategoryResponse(ApiSchema):
    category: CategoryDB


class CategoryListResponse(ApiSchema):
    categories: List[CategoryDB]


# ------------------------------
# Content
# ------------------------------
class ContentCreate(ApiSchema):
    title: str = PydField(..., min_length=3, max_length=200)
    type: ContentType
    description: str = PydField(..., min_length=10, max_length=1000)
    media_url: AnyHttpUrl
    content: Optional[str] = PydField(default=None, max_length=5000)
    # slug or id of an existing category
    category: Optional[str] = None
    tags: List[str] = PydField(default_factory=list)


class ContentUpdate(ApiSchema):
    """Partial update; only the fields sent are changed."""
    title: Optional[str] = PydField(default=None, min_length=3, max_length=200)
    type: Optional[ContentType] = None
    description: Optional[str] = PydField(default=None, min_length=10, max_length=1000)
    media_url: Optional[AnyHttpUrl] = None
    content: Optional[str] = PydField(default=None, max_length=5000)
    category: Optional[str] = None
    tags: Optional[List[str]] = None


class ContentDB(ApiSchema):
    id: str = PydField(..., alias="_id")
    title: str
    type: ContentType
    description: str
    media_url: str
    content: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = PydField(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


class ContentResponse(ApiSchema):
    message: str
    content: ContentDB


class ContentListResponse(ApiSchema):
    contents: List[ContentDB]
