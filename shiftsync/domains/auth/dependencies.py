# shiftsync/domains/auth/dependencies.py
from typing import Optional

import jwt
from fastapi import Depends, Header

from shiftsync.core.database import get_storage
from shiftsync.core.entities import User
from shiftsync.core.settings import settings
from shiftsync.core.storage import MemStorage
from shiftsync.shared.exceptions import InvalidTokenError, NotAuthenticatedError

from .types import AccessTokenPayload


def decode_access_token(token: str) -> AccessTokenPayload:
    """
    Verifies a bearer token signed with JWT_SECRET and returns its claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return AccessTokenPayload(**dict(payload))
    except (jwt.PyJWTError, ValueError):
        raise InvalidTokenError()


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Extracts the token from an ``Authorization: Bearer <token>`` header.
    Returns None when the request carries no bearer credentials.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization[len("Bearer ") :].strip()
    return token or None


async def get_optional_user(
    token: Optional[str] = Depends(get_bearer_token),
    storage: MemStorage = Depends(get_storage),
) -> Optional[User]:
    """
    Resolves the acting user for the request, or None for anonymous requests.

    A token that is present but invalid, expired, or names a missing or
    deactivated user is rejected outright rather than treated as anonymous.
    """
    if token is None:
        return None

    payload = decode_access_token(token)
    if not payload.sub.isdigit():
        raise InvalidTokenError()

    user = await storage.get_user(int(payload.sub))
    if not user or not user.active:
        raise InvalidTokenError()
    return user


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """
    Requires an authenticated user.
    """
    if user is None:
        raise NotAuthenticatedError()
    return user
