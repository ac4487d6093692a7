"""
Bearer token authentication.

Verifies HS256 JWTs whose ``id`` claim identifies the owning user, and
mints tokens for tooling and tests.

Dependencies: PyJWT, fastapi.security, studybuddy.configs
System role: Owner identity for every authenticated route
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studybuddy.configs import get_settings
from studybuddy.configs.auth import AuthSettings

logger = logging.getLogger(__name__)

# Optional Bearer token extractor (doesn't auto-raise on missing)
_bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(owner_id: str, settings: AuthSettings | None = None) -> str:
    """
    Mint a bearer token for an owner.

    Args:
        owner_id: Value for the ``id`` claim
        settings: Auth settings (defaults to application settings)

    Returns:
        Encoded JWT
    """
    settings = settings or get_settings().auth
    now = datetime.now(timezone.utc)
    payload = {
        "id": owner_id,
        "iat": now,
        "exp": now + timedelta(days=settings.token_ttl_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_owner_id(token: str, settings: AuthSettings) -> str | None:
    """Owner id from a valid token, or None when the token is rejected."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Bearer token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info("Bearer token rejected", extra={"error": str(e)})
        return None

    owner_id = payload.get("id")
    if owner_id is None or str(owner_id).strip() == "":
        return None
    return str(owner_id)


async def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """
    FastAPI dependency resolving the requesting owner.

    Raises:
        HTTPException 401: Missing or invalid bearer token
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
        )

    owner_id = decode_owner_id(credentials.credentials, get_settings().auth)
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
        )
    return owner_id
