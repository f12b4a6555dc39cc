"""
Best-effort machine translation through the MyMemory HTTP API.

Any failure (network, HTTP status, unexpected payload) falls back to the
source text; translation never fails the calling request.
"""

import asyncio
import logging
from typing import List, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

USER_AGENT = "NutriEd-App"


async def translate_text(
    text: str,
    *,
    source: Optional[str] = None,
    target: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    if not text or not text.strip():
        return text

    params = {
        "langpair": f"{source or settings.TRANSLATION_SOURCE_LANG}|{target or settings.TRANSLATION_TARGET_LANG}",
        "q": text,
    }
    try:
        if client is None:
            async with httpx.AsyncClient(
                timeout=settings.TRANSLATION_TIMEOUT_SECONDS,
                headers={"User-Agent": USER_AGENT},
            ) as own_client:
                response = await own_client.get(settings.TRANSLATION_API_URL, params=params)
        else:
            response = await client.get(settings.TRANSLATION_API_URL, params=params)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error translating text: {e}")
        return text

    if payload.get("responseStatus") == 200:
        translated = (payload.get("responseData") or {}).get("translatedText")
        if translated:
            return translated
    logger.error(f"Translation failed: {payload}")
    return text


async def translate_to_arabic(text: str, *, client: Optional[httpx.AsyncClient] = None) -> str:
    return await translate_text(text, client=client)


async def translate_many(texts: List[str], *, client: Optional[httpx.AsyncClient] = None) -> List[str]:
    """Translate several strings concurrently, preserving order."""
    return list(await asyncio.gather(*(translate_to_arabic(t, client=client) for t in texts)))
