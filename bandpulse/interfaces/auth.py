"""
Bearer-token authentication dependency.

Tokens are issued by the external auth provider and verified here
with the shared secret. Usage:

    @router.get("/protected")
    def protected(user: AuthUser = Depends(get_current_user)):
        return {"user_id": user.user_id}
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from bandpulse.core.config import settings
from bandpulse.domain.artists.errors import AuthenticationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    """The authenticated caller, as described by the token claims."""

    user_id: str
    email: Optional[str] = None


def decode_token(token: str) -> AuthUser:
    """Verify a token and extract the caller.

    Raises:
        AuthenticationError: If the token is invalid, expired, or has
            no ``userId`` claim.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise AuthenticationError("Invalid token") from exc

    user_id = payload.get("userId")
    if not user_id:
        raise AuthenticationError("Invalid token")
    return AuthUser(user_id=str(user_id), email=payload.get("email"))


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """FastAPI dependency resolving the caller from ``Authorization: Bearer``."""
    if credentials is None:
        raise AuthenticationError("No token provided")
    return decode_token(credentials.credentials)
