"""Schemas for /api/auth endpoints."""

from pydantic import BaseModel, Field

from rating_portal.models import Role

# Loose shape check only; uniqueness and normalization happen in services.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class IdentityOut(BaseModel):
    """Public view of an identity."""

    id: int
    name: str
    email: str
    role: Role
    address: str

    model_config = {"from_attributes": True}


class RegisterRequest(BaseModel):
    """Request body for self-registration. Role is not accepted."""

    name: str = Field(min_length=20, max_length=60)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str
    address: str = Field(max_length=400)


class RegisterResponse(BaseModel):
    message: str
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    """Token plus the identity it was issued for."""

    token: str
    identity: IdentityOut


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword")

    model_config = {"populate_by_name": True}
