# app/services/identity_service.py
from dataclasses import dataclass

import httpx

from app.config import settings
from app.core.logger import logger

SUPABASE_USER_PATH = "/auth/v1/user"

@dataclass
class AuthUser:
    """Caller resolved from a bearer token"""
    id: str
    email: str | None = None

async def verify_access_token(token: str) -> AuthUser | None:
    """
    Ask Supabase Auth who owns this access token.
    Returns None when the token is rejected.
    """
    if not settings.supabase_url:
        logger.error("SUPABASE_URL is not set, cannot verify tokens")
        return None

    async with httpx.AsyncClient(timeout=10.0) as client:
        try:
            response = await client.get(
                f"{settings.supabase_url.rstrip('/')}{SUPABASE_USER_PATH}",
                headers={
                    "apikey": settings.supabase_key,
                    "Authorization": f"Bearer {token}"
                }
            )
        except httpx.HTTPError as e:
            logger.error(f"Identity provider unreachable: {e}")
            return None

    if response.status_code != 200:
        logger.info(f"Token rejected by identity provider ({response.status_code})")
        return None

    user_data = response.json()
    user_id = user_data.get("id")
    if not user_id:
        return None

    return AuthUser(id=str(user_id), email=user_data.get("email"))
