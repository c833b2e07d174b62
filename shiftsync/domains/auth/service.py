import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from shiftsync.core.entities import User
from shiftsync.core.enums import UserRole
from shiftsync.core.settings import settings
from shiftsync.core.storage import MemStorage
from shiftsync.domains.auth.models import RegisterRequest
from shiftsync.shared.exceptions import InvalidCredentialsError, InvalidDataError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Malformed or unrecognised hashes count as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed bearer token for a user.

    Args:
        user: The user the token identifies
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT whose ``sub`` claim is the user's id
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


class AuthService:
    """Service for registration and credential checks"""

    def __init__(self, storage: MemStorage):
        self.storage = storage

    async def register(self, data: RegisterRequest) -> User:
        """
        Create an account through public self-registration.

        Self-registered accounts are always plain employees with no extra
        permissions or venue assignments; anything more is granted by a
        user manager afterwards.

        Raises:
            InvalidDataError: If passwords differ or the username is taken
        """
        if data.password != data.confirmPassword:
            raise InvalidDataError("Passwords don't match")

        if await self.storage.get_user_by_username(data.username):
            raise InvalidDataError("Username already exists")

        user = await self.storage.create_user(
            {
                "username": data.username,
                "passwordHash": hash_password(data.password),
                "fullName": data.fullName,
                "email": data.email,
                "phone": data.phone,
                "role": UserRole.EMPLOYEE,
            }
        )
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """
        Check credentials and record the login.

        Raises:
            InvalidCredentialsError: On unknown user, wrong password or
                deactivated account
        """
        user = await self.storage.get_user_by_username(username)
        if not user or not user.active or not verify_password(
            password, user.passwordHash
        ):
            logger.warning("Failed login attempt for user %s", username)
            raise InvalidCredentialsError()

        updated = await self.storage.update_user(
            user.id, {"lastLogin": datetime.now(timezone.utc)}
        )
        return updated or user


async def seed_initial_admin(storage: MemStorage) -> Optional[User]:
    """
    Create the configured administrator account if it does not exist yet.
    """
    if not settings.SEED_ADMIN_ENABLED:
        return None

    existing = await storage.get_user_by_username(settings.SEED_ADMIN_USERNAME)
    if existing:
        return existing

    admin = await storage.create_user(
        {
            "username": settings.SEED_ADMIN_USERNAME,
            "passwordHash": hash_password(settings.SEED_ADMIN_PASSWORD),
            "fullName": "Admin User",
            "email": settings.SEED_ADMIN_EMAIL,
            "role": settings.SEED_ADMIN_ROLE,
        }
    )
    logger.info("Seeded initial %s %s", admin.role.value, admin.username)
    return admin
