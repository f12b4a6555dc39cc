# app/core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from odmantic import AIOEngine
from passlib.context import CryptContext

from app.core.config import settings
from app.db.session import get_engine
from app.domains.users.models import ROLE_ADMIN, UserModel
from app.helpers.serialize import parse_object_id

ACCESS_TOKEN_COOKIE_NAME = "nutried_access_token"

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plaintext password against its bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hashes a password using bcrypt."""
    return pwd_context.hash(password)


@dataclass(frozen=True)
class Identity:
    """
    Request-scoped caller identity. Built once per request from the session
    cookie and passed explicitly into every service call.
    """
    id: str
    role: str
    email: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_user(cls, user: UserModel) -> "Identity":
        return cls(id=str(user.id), role=user.role, email=user.email, name=user.name or "User")


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a JWT access token.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode = {"exp": expire, "sub": str(subject)}
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(ACCESS_TOKEN_COOKIE_NAME)
    if token:
        return token
    # Non-browser clients may send the same JWT as a bearer token
    authorization = request.headers.get("Authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1]
    return None


async def get_current_user(
    request: Request,
    engine: AIOEngine = Depends(get_engine),
) -> UserModel:
    """
    Dependency to get the current user from the JWT stored in a cookie.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )

    token = _token_from_request(request)
    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        # Malformed token or bad signature
        raise credentials_exception

    obj_id = parse_object_id(user_id)
    if obj_id is None:
        raise credentials_exception

    user = await engine.find_one(UserModel, UserModel.id == obj_id)
    if user is None:
        raise credentials_exception

    return user


async def get_identity(user: UserModel = Depends(get_current_user)) -> Identity:
    return Identity.from_user(user)


async def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return identity
