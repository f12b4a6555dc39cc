# app/api/v1/endpoints/admin.py
"""
Admin console: user management and the sync/reporting views.
"""
import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from odmantic import AIOEngine

from app.core.exceptions import ValidationError
from app.core.security import Identity, require_admin
from app.db.session import get_engine
from app.domains.assessments import services as assessment_services
from app.domains.assessments.schemas import AssessmentDB
from app.domains.users import services as user_services
from app.domains.users.schemas import (
    ProfileResponse,
    UserAdminUpdate,
    UserListResponse,
    UserPublic,
)
from app.helpers.serialize import model_to_dto

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/users", response_model=UserListResponse)
async def list_users(
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    users = await user_services.list_users(engine)
    return UserListResponse(users=[model_to_dto(u, UserPublic) for u in users])


@router.patch("/users", response_model=ProfileResponse)
async def update_user(
    payload: UserAdminUpdate,
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    user = await user_services.admin_update_user(engine, user_id=id, payload=payload)
    return ProfileResponse(user=model_to_dto(user, UserPublic))


@router.delete("/users")
async def delete_user(
    id: str = Query(..., min_length=1),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    await user_services.delete_user(engine, id)
    return {"message": "User deleted successfully"}


@router.get("/sync")
async def sync(
    action: str = "sync",
    role: Optional[Literal["user", "admin"]] = None,
    completed: Optional[bool] = None,
    user_id: Optional[str] = Query(None, alias="userId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    admin: Identity = Depends(require_admin),
    engine: AIOEngine = Depends(get_engine),
):
    """
    Reporting views over users and assessments, selected by `action`:
    sync, fetch, stats, assessments-sync, assessments-fetch, assessments-stats.
    """
    logger.info(f"Admin {admin.id} requested sync action={action}")

    if action == "sync":
        return {"success": True, "action": action, "stats": await user_services.sync_users(engine)}

    if action == "fetch":
        users = await user_services.list_users(engine, role=role, completed=completed)
        return {
            "action": action,
            "success": True,
            "count": len(users),
            "users": [model_to_dto(u, UserPublic) for u in users],
        }

    if action == "stats":
        return {"action": action, "data": {"success": True, **await user_services.user_stats(engine)}}

    if action == "assessments-sync":
        return {"action": action, "success": True, **await assessment_services.sync_assessments(engine)}

    if action == "assessments-fetch":
        assessments = await assessment_services.list_assessments(
            engine, user_id=user_id, start_date=start_date, end_date=end_date
        )
        return {
            "action": action,
            "success": True,
            "count": len(assessments),
            "assessments": [model_to_dto(a, AssessmentDB) for a in assessments],
        }

    if action == "assessments-stats":
        return {"action": action, "data": {"success": True, **await assessment_services.assessment_stats(engine)}}

    raise ValidationError("Invalid action")
