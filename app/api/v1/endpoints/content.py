# app/api/v1/endpoints/content.py
"""
Content library: videos, posts and infographics published by admins.
Reading is public; writing is admin-only.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from odmantic import AIOEngine

from app.core.security import Identity, require_admin
from app.db.session import get_engine
from app.domains.library import services as library_services
from app.domains.library.schemas import (
    ContentCreate,
    ContentDB,
    ContentListResponse,
    ContentResponse,
    ContentUpdate,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/admin/content", tags=["content"])


@router.get("", response_model=ContentListResponse)
async def list_content(
    category: Optional[str] = None,
    engine: AIOEngine = Depends(get_engine),
):
    contents = await library_services.list_content(engine, category=category)
    return ContentListResponse(contents=[model_to_dto(c, ContentDB) for c in contents])


@router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    payload: ContentCreate,
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    content = await library_services.create_content(engine, payload)
    return ContentResponse(message="Content created successfully", content=model_to_dto(content, ContentDB))


@router.put("", response_model=ContentResponse)
async def update_content(
    payload: ContentUpdate,
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    content = await library_services.update_content(engine, id, payload)
    return ContentResponse(message="Content updated successfully", content=model_to_dto(content, ContentDB))


@router.delete("")
async def delete_content(
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    await library_services.delete_content(engine, id)
    return {"message": "Content deleted successfully"}
