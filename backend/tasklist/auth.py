"""
Bearer-token authentication.

Tokens are JWTs whose ``sub`` claim is the stable user id. Sign-up and
password flows belong to the identity service that issues them; this
module only verifies tokens (and can mint them for development and tests).
"""

import logging
import time
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import get_settings

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, ttl_seconds: Optional[int] = None) -> str:
    settings = get_settings()
    ttl = settings.jwt_ttl_seconds if ttl_seconds is None else ttl_seconds
    exp = int(time.time()) + ttl
    return jwt.encode({"sub": user_id, "exp": exp}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def resolve_user_id(token: Optional[str]) -> Optional[str]:
    """Return the user id carried by a valid token, else None."""
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        return None
    user_id = payload.get("sub")
    return user_id if isinstance(user_id, str) and user_id else None


def get_current_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[str]:
    """FastAPI dependency; never raises, handlers decide what anonymity means."""
    return resolve_user_id(creds.credentials if creds else None)
