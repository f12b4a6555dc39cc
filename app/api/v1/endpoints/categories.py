# app/api/v1/endpoints/categories.py
from fastapi import APIRouter, Depends, Query, status
from odmantic import AIOEngine

from app.core.security import Identity, get_identity, require_admin
from app.db.session import get_engine
from app.domains.library import services as library_services
from app.domains.library.schemas import (
    CategoryCreate,
    CategoryDB,
    CategoryListResponse,
    CategoryResponse,
)
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/admin/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    identity: Identity = Depends(get_identity),
    engine: AIOEngine = Depends(get_engine),
):
    categories = await library_services.list_categories(engine)
    return CategoryListResponse(categories=[model_to_dto(c, CategoryDB) for c in categories])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Create a category; the Arabic name and description are filled in by the
    translation service.
    """
    category = await library_services.create_category(engine, payload)
    return CategoryResponse(category=model_to_dto(category, CategoryDB))


@router.put("", response_model=CategoryResponse)
async def update_category(
    payload: CategoryCreate,
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    category = await library_services.update_category(engine, id, payload)
    return CategoryResponse(category=model_to_dto(category, CategoryDB))


@router.delete("")
async def delete_category(
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    await library_services.delete_category(engine, id)
    return {"message": "Category deleted successfully"}
