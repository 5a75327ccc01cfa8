"""Pydantic schemas for API request/response validation."""

from rating_portal.schemas.auth import (
    ChangePasswordRequest,
    IdentityOut,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from rating_portal.schemas.common import ErrorDetail, ErrorResponse, MessageResponse
from rating_portal.schemas.dashboard import (
    DashboardStats,
    OwnerStatsResponse,
    RatingUserOut,
    RatingUsersResponse,
    StoreDetails,
)
from rating_portal.schemas.stores import (
    AdminStoreListResponse,
    AdminStoreOut,
    OwnerOut,
    RatingSubmitRequest,
    RatingSubmitResponse,
    RatingSummaryOut,
    StoreCreateRequest,
    StoreCreateResponse,
    UserStoreListResponse,
    UserStoreOut,
)
from rating_portal.schemas.users import (
    AdminUserListResponse,
    AdminUserOut,
    UserCreateRequest,
    UserCreateResponse,
)

__all__ = [
    "AdminStoreListResponse",
    "AdminStoreOut",
    "AdminUserListResponse",
    "AdminUserOut",
    "ChangePasswordRequest",
    "DashboardStats",
    "ErrorDetail",
    "ErrorResponse",
    "IdentityOut",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "OwnerOut",
    "OwnerStatsResponse",
    "RatingSubmitRequest",
    "RatingSubmitResponse",
    "RatingSummaryOut",
    "RatingUserOut",
    "RatingUsersResponse",
    "RegisterRequest",
    "RegisterResponse",
    "StoreCreateRequest",
    "StoreCreateResponse",
    "StoreDetails",
    "UserCreateRequest",
    "UserCreateResponse",
    "UserStoreListResponse",
    "UserStoreOut",
]
