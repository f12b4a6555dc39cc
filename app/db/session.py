# app/db/session.py
"""
MongoDB access for the app: one Motor client shared by a single odmantic engine.
"""
from motor.motor_asyncio import AsyncIOMotorClient
from odmantic import AIOEngine

from app.core.config import settings

_client = AsyncIOMotorClient(settings.MONGO_URI, appname=settings.APP_NAME)
engine = AIOEngine(client=_client, database=settings.MONGO_DB)


async def get_engine() -> AIOEngine:
    """
    FastAPI dependency returning the shared engine.
    Tests override it with an engine over an in-memory client.
    """
    return engine

# Raw collections (index creation at startup, bulk mark-read, distinct counts)
# come from engine.get_collection(Model).
