"""
Content library and category management.
"""

import logging
import re
from typing import List, Optional

from odmantic import AIOEngine, query
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import NotFoundError, ValidationError
from app.domains.library.models import CategoryModel, ContentModel
from app.domains.library.schemas import CategoryCreate, ContentCreate, ContentUpdate
from app.domains.translation import services as translation
from app.helpers.serialize import parse_object_id, utcnow

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY_MESSAGE = "Category name already exists"
INVALID_CATEGORY_MESSAGE = "Invalid category. Please choose an existing category."


def slugify(name: str) -> str:
    slug = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^\w-]", "", slug, flags=re.ASCII)


# ------------------------------
# Categories
# ------------------------------

async def list_categories(engine: AIOEngine) -> List[CategoryModel]:
    return await engine.find(CategoryModel, sort=(CategoryModel.order, CategoryModel.name))


async def _get_category(engine: AIOEngine, category_id: str) -> CategoryModel:
    obj_id = parse_object_id(category_id)
    category = None
    if obj_id is not None:
        category = await engine.find_one(CategoryModel, CategoryModel.id == obj_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


async def _ensure_unique_name(engine: AIOEngine, name: str, exclude: Optional[CategoryModel] = None) -> None:
    filters = [CategoryModel.name == name]
    if exclude is not None:
        filters.append(CategoryModel.id != exclude.id)
    if await engine.find_one(CategoryModel, *filters):
        raise ValidationError(DUPLICATE_CATEGORY_MESSAGE)


async def create_category(engine: AIOEngine, payload: CategoryCreate) -> CategoryModel:
    await _ensure_unique_name(engine, payload.name)
    name_ar, description_ar = await translation.translate_many([payload.name, payload.description])

    now = utcnow()
    category = CategoryModel(
        **payload.model_dump(),
        slug=slugify(payload.name),
        name_ar=name_ar,
        description_ar=description_ar,
        created_at=now,
        updated_at=now,
    )
    try:
        await engine.save(category)
    except DuplicateKeyError:
        raise ValidationError(DUPLICATE_CATEGORY_MESSAGE)
    logger.info(f"Category '{category.slug}' created id={category.id}")
    return category


async def update_category(engine: AIOEngine, category_id: str, payload: CategoryCreate) -> CategoryModel:
    category = await _get_category(engine, category_id)
    await _ensure_unique_name(engine, payload.name, exclude=category)
    name_ar, description_ar = await translation.translate_many([payload.name, payload.description])

    category.model_update(payload)
    category.slug = slugify(payload.name)
    category.name_ar = name_ar
    category.description_ar = description_ar
    category.updated_at = utcnow()
    try:
        await engine.save(category)
    except DuplicateKeyError:
        raise ValidationError(DUPLICATE_CATEGORY_MESSAGE)
    logger.info(f"Category id={category.id} updated")
    return category


async def delete_category(engine: AIOEngine, category_id: str) -> None:
    category = await _get_category(engine, category_id)
    await engine.delete(category)
    logger.info(f"Category id={category_id} deleted")


async def resolve_category_slug(engine: AIOEngine, reference: str) -> str:
    """
    Match a category by slug or id and return its slug, so content always
    stores slugs and filters consistently.
    """
    conditions = [CategoryModel.slug == reference]
    obj_id = parse_object_id(reference)
    if obj_id is not None:
        conditions.append(CategoryModel.id == obj_id)
    category = await engine.find_one(CategoryModel, query.or_(*conditions))
    if category is None:
        raise ValidationError(INVALID_CATEGORY_MESSAGE)
    return category.slug


# ------------------------------
# Content
# ------------------------------

async def list_content(engine: AIOEngine, *, category: Optional[str] = None) -> List[ContentModel]:
    filters = [ContentModel.category == category] if category else []
    return await engine.find(ContentModel, *filters, sort=ContentModel.created_at.desc())


async def create_content(engine: AIOEngine, payload: ContentCreate) -> ContentModel:
    data = payload.model_dump()
    data["media_url"] = str(payload.media_url)
    if payload.category:
        data["category"] = await resolve_category_slug(engine, payload.category)

    now = utcnow()
    content = ContentModel(**data, created_at=now, updated_at=now)
    await engine.save(content)
    logger.info(f"Content id={content.id} created ({content.type})")
    return content


async def _get_content(engine: AIOEngine, content_id: str) -> ContentModel:
    obj_id = parse_object_id(content_id)
    content = None
    if obj_id is not None:
        content = await engine.find_one(ContentModel, ContentModel.id == obj_id)
    if content is None:
        raise NotFoundError("Content not found")
    return content


async def update_content(engine: AIOEngine, content_id: str, payload: ContentUpdate) -> ContentModel:
    content = await _get_content(engine, content_id)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("media_url") is not None:
        changes["media_url"] = str(changes["media_url"])
    if changes.get("category"):
        changes["category"] = await resolve_category_slug(engine, changes["category"])
    # Required fields cannot be cleared through a partial update
    changes = {k: v for k, v in changes.items() if v is not None or k in ("content", "category")}

    content.model_update(changes)
    content.updated_at = utcnow()
    await engine.save(content)
    logger.info(f"Content id={content.id} updated: fields={sorted(changes)}")
    return content


async def delete_content(engine: AIOEngine, content_id: str) -> None:
    content = await _get_content(engine, content_id)
    await engine.delete(content)
    logger.info(f"Content id={content_id} deleted")
