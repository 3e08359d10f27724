"""
Request-scoped user identity.
"""
from typing import Optional

from fastapi import HTTPException, Request

from .config import config


def get_current_user(request: Request) -> str:
    """Dependency returning the authenticated user id from the gateway header."""
    user_id: Optional[str] = request.headers.get(config.USER_HEADER)
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id.strip()
