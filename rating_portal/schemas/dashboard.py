"""Schemas for admin and owner dashboards."""

from datetime import datetime

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_users: int = Field(alias="totalUsers")
    total_stores: int = Field(alias="totalStores")
    total_ratings: int = Field(alias="totalRatings")

    model_config = {"populate_by_name": True}


class StoreDetails(BaseModel):
    name: str
    email: str
    address: str

    model_config = {"from_attributes": True}


class OwnerStatsResponse(BaseModel):
    """Owner's own store with its aggregate rating."""

    store_details: StoreDetails = Field(alias="storeDetails")
    average_rating: float = Field(alias="averageRating")
    total_ratings: int = Field(alias="totalRatings")

    model_config = {"populate_by_name": True}


class RatingUserOut(BaseModel):
    id: int
    name: str
    email: str
    rating: int
    rated_at: datetime | None = Field(alias="ratedAt", default=None)

    model_config = {"populate_by_name": True}


class RatingUsersResponse(BaseModel):
    users: list[RatingUserOut]
