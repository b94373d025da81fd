"""
AMAP place-search proxy route. No authentication required.
"""
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query
from tripmaster.services.amap_service import search_places
from tripmaster.api.dependencies import get_http_client

router = APIRouter(prefix="/amap", tags=["amap"])


@router.get("/place/text")
async def place_text_search(
    keywords: str = Query(..., min_length=1),
    city: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client)
):
    """Search places by keyword, optionally within a city."""
    return await search_places(client, keywords, city)
