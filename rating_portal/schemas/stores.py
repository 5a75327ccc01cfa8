"""Schemas for store listings, store creation and ratings."""

from pydantic import BaseModel, Field

from rating_portal.schemas.auth import EMAIL_PATTERN


class RatingSummaryOut(BaseModel):
    """Aggregate rating of one store."""

    average: float
    count: int = Field(ge=0)


class OwnerOut(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class AdminStoreOut(BaseModel):
    """Store row in the admin listing."""

    id: int
    name: str
    email: str
    address: str
    rating: float
    rating_count: int = Field(alias="ratingCount")
    owner: OwnerOut

    model_config = {"populate_by_name": True}


class AdminStoreListResponse(BaseModel):
    stores: list[AdminStoreOut]


class StoreCreateRequest(BaseModel):
    """Request body for admin store creation (also creates the owner login)."""

    name: str = Field(min_length=20, max_length=60)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    address: str = Field(max_length=400)
    password: str


class StoreCreateResponse(BaseModel):
    message: str
    store_id: int = Field(alias="storeId")
    owner_id: int = Field(alias="ownerId")

    model_config = {"populate_by_name": True}


class UserStoreOut(BaseModel):
    """Store row in the end-user listing."""

    id: int
    name: str
    address: str
    overall_rating: float = Field(alias="overallRating")
    rating_count: int = Field(alias="ratingCount")
    user_rating: int | None = Field(alias="userRating", default=None)

    model_config = {"populate_by_name": True}


class UserStoreListResponse(BaseModel):
    stores: list[UserStoreOut]


class RatingSubmitRequest(BaseModel):
    """Rating submission. Range is checked by the rating service."""

    store_id: int = Field(alias="storeId")
    value: int

    model_config = {"populate_by_name": True}


class RatingSubmitResponse(BaseModel):
    message: str
    rating_id: int = Field(alias="ratingId")
    created: bool

    model_config = {"populate_by_name": True}
