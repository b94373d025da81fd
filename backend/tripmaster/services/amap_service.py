"""
AMAP place-search proxy.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from tripmaster.core.config import settings
from tripmaster.core.exceptions import AppError

logger = logging.getLogger(__name__)


async def search_places(
    client: httpx.AsyncClient,
    keywords: str,
    city: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Forward a keyword search to AMAP's text search and return its JSON unchanged.

    Raises:
        AppError: When the API key is missing or the upstream call fails
    """
    if not settings.AMAP_API_KEY:
        logger.error("AMAP_API_KEY is not configured. Please set it in .env file.")
        raise AppError("AMAP API key not configured")

    api_url = f"{settings.AMAP_API_URL.rstrip('/')}/place/text"
    params = {
        "key": settings.AMAP_API_KEY,
        "keywords": keywords,
        "city": city or "",
        "offset": 20,
        "page": 1,
        "extensions": "all",
    }

    try:
        logger.info(f"Searching AMAP places for '{keywords}' in '{city or ''}'")
        response = await client.get(api_url, params=params)
        return response.json()
    except httpx.HTTPError as e:
        logger.error(f"HTTP error with AMAP API: {e}")
        raise AppError("Failed to fetch from AMAP API") from e
    except ValueError as e:
        logger.error(f"AMAP API returned invalid JSON: {e}")
        raise AppError("Failed to fetch from AMAP API") from e
