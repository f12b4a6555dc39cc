# app/domains/users/services.py
"""
Account, profile and admin user-management logic.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from odmantic import AIOEngine
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.domains.users.models import ROLE_ADMIN, ROLE_USER, Profile, UserModel
from app.domains.users.schemas import ProfileSchema, UserAdminUpdate, UserRegister
from app.helpers.serialize import parse_object_id, utcnow

logger = logging.getLogger(__name__)


async def get_user_by_id(engine: AIOEngine, user_id: str) -> Optional[UserModel]:
    """
    Retrieve a user by id. Returns None if the id is malformed or unknown.
    """
    obj_id = parse_object_id(user_id)
    if obj_id is None:
        logger.warning(f"Invalid ObjectId format for user: {user_id}")
        return None
    return await engine.find_one(UserModel, UserModel.id == obj_id)


async def register_user(engine: AIOEngine, payload: UserRegister) -> UserModel:
    email = payload.email.lower()
    existing_user = await engine.find_one(UserModel, UserModel.email == email)
    if existing_user:
        raise ValidationError("Email already in use")

    user = UserModel(
        name=payload.name.strip(),
        email=email,
        password_hash=get_password_hash(payload.password),
        role=ROLE_USER,
    )
    try:
        await engine.save(user)
    except DuplicateKeyError:
        raise ValidationError("Email already in use")

    logger.info(f"Registered user id={user.id}")
    return user


async def authenticate(engine: AIOEngine, email: str, password: str) -> UserModel:
    user = await engine.find_one(UserModel, UserModel.email == email.lower())
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return user


async def update_profile(engine: AIOEngine, *, user_id: str, payload: ProfileSchema) -> UserModel:
    user = await get_user_by_id(engine, user_id)
    if user is None:
        raise NotFoundError("User not found")

    user.profile = Profile(**payload.model_dump())
    user.updated_at = utcnow()
    await engine.save(user)
    logger.info(f"Profile updated for user_id={user_id}")
    return user


async def list_specialists(engine: AIOEngine) -> List[UserModel]:
    return await engine.find(UserModel, UserModel.role == ROLE_ADMIN, sort=UserModel.name)


# ------------------------------
# Admin operations
# ------------------------------

async def list_users(
    engine: AIOEngine,
    *,
    role: Optional[str] = None,
    completed: Optional[bool] = None,
) -> List[UserModel]:
    filters = []
    if role:
        filters.append(UserModel.role == role)
    if completed is not None:
        filters.append(UserModel.has_completed_assessment == completed)
    return await engine.find(UserModel, *filters, sort=UserModel.created_at.desc())


async def admin_update_user(engine: AIOEngine, *, user_id: str, payload: UserAdminUpdate) -> UserModel:
    user = await get_user_by_id(engine, user_id)
    if user is None:
        raise NotFoundError("User not found")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("No fields to update")
    user.model_update(changes)
    user.updated_at = utcnow()
    await engine.save(user)
    logger.info(f"Admin updated user_id={user_id}: fields={sorted(changes)}")
    return user


async def delete_user(engine: AIOEngine, user_id: str) -> None:
    """
    Delete an account. Appointments, messages and requests keep their
    soft references and denormalized names.
    """
    user = await get_user_by_id(engine, user_id)
    if user is None:
        raise NotFoundError("User not found")
    await engine.delete(user)
    logger.info(f"Deleted user_id={user_id}")


async def sync_users(engine: AIOEngine) -> Dict[str, Any]:
    started = time.monotonic()
    total = await engine.count(UserModel)
    return {
        "totalUsers": total,
        "timestamp": utcnow().isoformat(),
        "duration": int((time.monotonic() - started) * 1000),
    }


async def user_stats(engine: AIOEngine) -> Dict[str, int]:
    total = await engine.count(UserModel)
    admins = await engine.count(UserModel, UserModel.role == ROLE_ADMIN)
    users = await engine.count(UserModel, UserModel.role == ROLE_USER)
    completed = await engine.count(UserModel, UserModel.has_completed_assessment == True)  # noqa: E712
    return {
        "totalUsers": total,
        "admins": admins,
        "users": users,
        "completedAssessment": completed,
        "pendingAssessment": total - completed,
    }

