"""Caller identification.

Authentication happens upstream (gateway / OIDC proxy); the proxy forwards
the authenticated user id in a trusted header.
"""

import structlog
from fastapi import HTTPException, Request, status

from autocat.config import settings

logger = structlog.get_logger()


async def get_current_user_id(request: Request) -> str:
    """Return the user id forwarded by the auth proxy, or 401."""
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if not user_id:
        logger.warning("missing_user_id_header", header=settings.user_id_header)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
