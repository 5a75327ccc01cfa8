"""Authentication endpoints.

POST /api/auth/register        - Self-registration (role forced to user)
POST /api/auth/login           - Credentials -> token + identity
POST /api/auth/change-password - Authenticated password change
GET  /api/auth/me              - Current identity

Routers are thin: call services for business logic.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.schemas import (
    ChangePasswordRequest,
    IdentityOut,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
)
from rating_portal.services.accounts import change_password, register_user
from rating_portal.services.authentication import CurrentIdentity, login
from rating_portal.stores.postgres import get_db

router = APIRouter()

DbSession = Annotated[AsyncSession, Depends(get_db)]


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, session: DbSession) -> RegisterResponse:
    """Register a new end user.

    Raises:
        400 INVALID_VALUE: Password policy failure.
        409 CONFLICT: Email already in use.
    """
    user = await register_user(
        session,
        name=request.name,
        email=request.email,
        password=request.password,
        address=request.address,
    )
    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login_endpoint(request: LoginRequest, session: DbSession) -> LoginResponse:
    """Exchange credentials for a bearer token.

    Raises:
        401 INVALID_CREDENTIALS: Unknown email or wrong password (indistinguishable).
    """
    result = await login(session, request.email, request.password)
    return LoginResponse(token=result.token, identity=IdentityOut.model_validate(result.identity))


@router.post("/change-password", response_model=MessageResponse)
async def change_password_endpoint(
    request: ChangePasswordRequest,
    identity: CurrentIdentity,
    session: DbSession,
) -> MessageResponse:
    """Change the caller's password. Existing tokens stay valid until they expire."""
    await change_password(
        session,
        identity,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return MessageResponse(message="Password updated successfully")


@router.get("/me", response_model=IdentityOut)
async def me(identity: CurrentIdentity) -> IdentityOut:
    """Return the authenticated identity."""
    return IdentityOut.model_validate(identity)
