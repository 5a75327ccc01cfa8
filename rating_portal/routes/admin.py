"""Admin endpoints (admin role only).

GET  /api/admin/dashboard-stats
GET  /api/admin/stores
POST /api/admin/stores
GET  /api/admin/stores/{store_id}/rating
GET  /api/admin/users
POST /api/admin/users
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import Role
from rating_portal.schemas import (
    AdminStoreListResponse,
    AdminStoreOut,
    AdminUserListResponse,
    AdminUserOut,
    DashboardStats,
    OwnerOut,
    RatingSummaryOut,
    StoreCreateRequest,
    StoreCreateResponse,
    UserCreateRequest,
    UserCreateResponse,
)
from rating_portal.services.accounts import create_store_with_owner, create_user_as_admin
from rating_portal.services.authorization import require_admin
from rating_portal.services.directory import (
    SortOrder,
    StoreSortField,
    UserSortField,
    get_dashboard_counts,
    get_store_summary,
    list_stores_for_admin,
    list_users_for_admin,
)
from rating_portal.stores.postgres import get_db

router = APIRouter(dependencies=[Depends(require_admin)])

DbSession = Annotated[AsyncSession, Depends(get_db)]


@router.get("/dashboard-stats", response_model=DashboardStats)
async def dashboard_stats(session: DbSession) -> DashboardStats:
    """Total users, stores and ratings."""
    counts = await get_dashboard_counts(session)
    return DashboardStats(
        total_users=counts.total_users,
        total_stores=counts.total_stores,
        total_ratings=counts.total_ratings,
    )


@router.get("/stores", response_model=AdminStoreListResponse)
async def list_stores(
    session: DbSession,
    name: str | None = Query(default=None, max_length=60),
    email: str | None = Query(default=None, max_length=255),
    address: str | None = Query(default=None, max_length=400),
    sort: StoreSortField = Query(default="name"),
    order: SortOrder = Query(default="asc"),
) -> AdminStoreListResponse:
    """List stores with owner and aggregate rating, filtered and sorted."""
    rows = await list_stores_for_admin(
        session,
        name=name,
        email=email,
        address=address,
        sort=sort,
        order=order,
    )
    return AdminStoreListResponse(
        stores=[
            AdminStoreOut(
                id=row.store.id,
                name=row.store.name,
                email=row.store.email,
                address=row.store.address,
                rating=row.summary.average,
                rating_count=row.summary.count,
                owner=OwnerOut.model_validate(row.store.owner),
            )
            for row in rows
        ]
    )


@router.post("/stores", response_model=StoreCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_store(request: StoreCreateRequest, session: DbSession) -> StoreCreateResponse:
    """Create a store and its owner login in one transaction.

    Raises:
        400 INVALID_VALUE: Password policy failure.
        409 CONFLICT: Email already in use.
    """
    store = await create_store_with_owner(
        session,
        name=request.name,
        email=request.email,
        address=request.address,
        password=request.password,
    )
    return StoreCreateResponse(
        message="Store added successfully",
        store_id=store.id,
        owner_id=store.owner_id,
    )


@router.get("/stores/{store_id}/rating", response_model=RatingSummaryOut)
async def store_rating(
    session: DbSession,
    store_id: int = Path(ge=1),
) -> RatingSummaryOut:
    """Aggregate rating of any store."""
    summary = await get_store_summary(session, store_id)
    return RatingSummaryOut(average=summary.average, count=summary.count)


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    session: DbSession,
    name: str | None = Query(default=None, max_length=60),
    email: str | None = Query(default=None, max_length=255),
    address: str | None = Query(default=None, max_length=400),
    role: Role | None = Query(default=None),
    sort: UserSortField = Query(default="name"),
    order: SortOrder = Query(default="asc"),
) -> AdminUserListResponse:
    """List users, filtered and sorted. Owners include their store's rating."""
    rows = await list_users_for_admin(
        session,
        name=name,
        email=email,
        address=address,
        role=role,
        sort=sort,
        order=order,
    )
    return AdminUserListResponse(
        users=[
            AdminUserOut(
                id=row.user.id,
                name=row.user.name,
                email=row.user.email,
                address=row.user.address,
                role=row.user.role,
                created_at=row.user.created_at,
                store_id=row.store_id,
                rating=row.rating,
            )
            for row in rows
        ]
    )


@router.post("/users", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreateRequest, session: DbSession) -> UserCreateResponse:
    """Create an admin or user identity.

    Raises:
        400 INVALID_VALUE: Role is owner, or password policy failure.
        409 CONFLICT: Email already in use.
    """
    user = await create_user_as_admin(
        session,
        name=request.name,
        email=request.email,
        password=request.password,
        address=request.address,
        role=request.role,
    )
    return UserCreateResponse(message="User added successfully", user_id=user.id)
