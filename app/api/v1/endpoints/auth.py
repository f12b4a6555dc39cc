"""
API endpoints for account registration and password login.

The JWT is kept in a secure, HttpOnly cookie to mitigate XSS token theft.
"""

from fastapi import APIRouter, Depends, Response, status
from odmantic import AIOEngine

from app.core.config import settings
from app.core.security import (
    ACCESS_TOKEN_COOKIE_NAME,
    create_access_token,
    get_current_user,
)
from app.db.session import get_engine
from app.domains.users import services as user_services
from app.domains.users.models import UserModel
from app.domains.users.schemas import AuthResponse, UserLogin, UserPublic, UserRegister, UserSummary
from app.helpers.serialize import model_to_dto

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _summary(user: UserModel) -> UserSummary:
    return UserSummary(id=str(user.id), name=user.name, email=user.email)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, engine: AIOEngine = Depends(get_engine)):
    """
    Handles new user registration with name, email and password.
    """
    user = await user_services.register_user(engine, payload)
    return AuthResponse(message="User registered successfully", user=_summary(user))


@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_200_OK)
async def login(response: Response, payload: UserLogin, engine: AIOEngine = Depends(get_engine)):
    """
    Handles user login with email and password.
    On success, it sets a secure HttpOnly cookie with the JWT.
    """
    user = await user_services.authenticate(engine, payload.email, payload.password)

    access_token = create_access_token(subject=str(user.id))
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE_NAME,
        value=access_token,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return AuthResponse(message="Login successful", user=_summary(user))


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Logs the user out by deleting the access token cookie.
    """
    response.delete_cookie(ACCESS_TOKEN_COOKIE_NAME)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserPublic)
async def read_users_me(current_user: UserModel = Depends(get_current_user)):
    """
    Protected endpoint to fetch the details of the currently logged-in user.
    """
    return model_to_dto(current_user, UserPublic)
