# shiftsync/domains/auth/routes.py
from fastapi import APIRouter, Depends, status

from shiftsync.core.database import get_storage
from shiftsync.core.entities import User
from shiftsync.core.storage import MemStorage
from shiftsync.domains.auth.dependencies import get_current_user
from shiftsync.domains.auth.models import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from shiftsync.domains.auth.service import AuthService, create_access_token

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="register",
)
async def register(
    data: RegisterRequest, storage: MemStorage = Depends(get_storage)
) -> TokenResponse:
    """
    Self-register a new employee account and sign it in.
    """
    user = await AuthService(storage).register(data)
    return TokenResponse(
        accessToken=create_access_token(user), user=UserResponse.from_entity(user)
    )


@router.post("/login", response_model=TokenResponse, operation_id="login")
async def login(
    credentials: LoginRequest, storage: MemStorage = Depends(get_storage)
) -> TokenResponse:
    user = await AuthService(storage).authenticate(
        credentials.username, credentials.password
    )
    return TokenResponse(
        accessToken=create_access_token(user), user=UserResponse.from_entity(user)
    )


@router.get("/user", response_model=UserResponse, operation_id="getCurrentUser")
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(user)
