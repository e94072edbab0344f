"""
JWT bearer authentication for the courier platform API.

Token issuance belongs to the auth service; this module only mints tokens
for internal use and tests, verifies incoming bearer tokens and exposes the
authenticated user as a FastAPI dependency.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from .config import get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Token payload data."""

    user_id: Optional[str] = None
    email: Optional[str] = None


class User(BaseModel):
    """Authenticated principal."""

    id: str
    email: Optional[str] = None
    is_active: bool = True


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.jwt_access_token_expire_minutes
        )

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(
        to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str, token_type: str = "access") -> Optional[TokenData]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        token_type: Expected token type

    Returns:
        TokenData if valid, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True},
        )
    except ExpiredSignatureError:
        logger.warning("Token has expired")
        return None
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if payload.get("type") != token_type:
        logger.warning(
            f"Token type mismatch: expected {token_type}, got {payload.get('type')}"
        )
        return None

    sub = payload.get("sub")
    if not sub:
        return None

    return TokenData(user_id=str(sub), email=payload.get("email"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    """Resolve the current authenticated user from the bearer token."""

    if not credentials:
        raise AuthenticationError("Could not validate credentials")

    token_data = verify_token(credentials.credentials)
    if token_data is None:
        raise AuthenticationError("Could not validate credentials")

    return User(id=token_data.user_id, email=token_data.email)
