import asyncio

from app.core.security import Identity, create_access_token, get_password_hash
from app.domains.users.models import ROLE_ADMIN, ROLE_USER, UserModel

TEST_PASSWORD = "secret123"


async def create_user(engine, *, name="Jane Doe", email="jane@example.com", role=ROLE_USER) -> UserModel:
    user = UserModel(name=name, email=email, password_hash=get_password_hash(TEST_PASSWORD), role=role)
    await engine.save(user)
    return user


async def create_admin(engine, *, name="Dr. Amal", email="amal@example.com") -> UserModel:
    return await create_user(engine, name=name, email=email, role=ROLE_ADMIN)


def run(coro):
    """Drive a coroutine from a synchronous HTTP test, which runs outside any event loop."""
    return asyncio.run(coro)


def identity(user: UserModel) -> Identity:
    return Identity.from_user(user)


def auth_headers(user: UserModel) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}
