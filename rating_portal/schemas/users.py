"""Schemas for admin user management."""

from datetime import datetime

from pydantic import BaseModel, Field

from rating_portal.models import Role
from rating_portal.schemas.auth import EMAIL_PATTERN


class UserCreateRequest(BaseModel):
    """Admin-created user. Only admin and user roles are accepted."""

    name: str = Field(min_length=20, max_length=60)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str
    address: str = Field(max_length=400)
    role: Role


class UserCreateResponse(BaseModel):
    message: str
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}


class AdminUserOut(BaseModel):
    """User row in the admin listing. Owners carry their store and its rating."""

    id: int
    name: str
    email: str
    address: str
    role: Role
    created_at: datetime | None = Field(alias="createdAt", default=None)
    store_id: int | None = Field(alias="storeId", default=None)
    rating: float | None = None

    model_config = {"populate_by_name": True}


class AdminUserListResponse(BaseModel):
    users: list[AdminUserOut]
