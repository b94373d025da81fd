"""
Shared route dependencies: the authenticated caller and the outbound HTTP client.
"""
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tripmaster.core.config import settings
from tripmaster.core.exceptions import ForbiddenError, UnauthorizedError
from tripmaster.core.security import decode_access_token

security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Identity taken from a verified token."""
    user_id: int
    username: Optional[str] = None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Resolve the caller from the ``Authorization: Bearer`` header.

    A missing token is 401. A token that fails verification, or carries no
    userId claim, is 403. The user row itself is not loaded here.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token missing")

    payload = decode_access_token(credentials.credentials)
    if not payload or payload.get("userId") is None:
        raise ForbiddenError("Invalid access token")

    try:
        user_id = int(payload["userId"])
    except (TypeError, ValueError):
        raise ForbiddenError("Invalid access token")

    return CurrentUser(user_id=user_id, username=payload.get("username"))


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency yielding a short-lived client for upstream calls."""
    async with httpx.AsyncClient(timeout=settings.AMAP_TIMEOUT) as client:
        yield client
