"""Read-side listings and dashboards.

Every average shown here comes from services.ratings (compute_average /
compute_averages), never from a local formula.

Listings support simple case-insensitive substring filters and sorting by a
whitelisted field.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rating_portal.models import Rating, Role, Store, User
from rating_portal.services.errors import NotFound
from rating_portal.services.ratings import (
    RatingSummary,
    compute_average,
    compute_averages,
    get_user_ratings,
)

SortOrder = Literal["asc", "desc"]
StoreSortField = Literal["name", "email", "address", "rating"]
UserSortField = Literal["name", "email", "address", "role", "rating"]


@dataclass(frozen=True)
class DashboardCounts:
    total_users: int
    total_stores: int
    total_ratings: int


@dataclass(frozen=True)
class AdminStoreRow:
    store: Store
    summary: RatingSummary


@dataclass(frozen=True)
class AdminUserRow:
    user: User
    store_id: int | None
    rating: float | None


@dataclass(frozen=True)
class UserStoreRow:
    store: Store
    summary: RatingSummary
    user_rating: int | None


@dataclass(frozen=True)
class OwnerStats:
    store: Store
    summary: RatingSummary


@dataclass(frozen=True)
class RatingUserRow:
    user: User
    rating: int
    rated_at: datetime


def _contains(column, needle: str | None):
    if not needle:
        return None
    return func.lower(column).contains(needle.strip().lower(), autoescape=True)


def _apply_filters(stmt: Select, filters: list) -> Select:
    for clause in filters:
        if clause is not None:
            stmt = stmt.where(clause)
    return stmt


async def get_dashboard_counts(session: AsyncSession) -> DashboardCounts:
    """Totals for the admin dashboard."""
    total_users = await session.scalar(select(func.count(User.id)))
    total_stores = await session.scalar(select(func.count(Store.id)))
    total_ratings = await session.scalar(select(func.count(Rating.id)))
    return DashboardCounts(
        total_users=total_users or 0,
        total_stores=total_stores or 0,
        total_ratings=total_ratings or 0,
    )


async def list_stores_for_admin(
    session: AsyncSession,
    *,
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    sort: StoreSortField = "name",
    order: SortOrder = "asc",
) -> list[AdminStoreRow]:
    """All stores with owner and aggregate rating."""
    stmt = select(Store).options(selectinload(Store.owner))
    stmt = _apply_filters(
        stmt,
        [_contains(Store.name, name), _contains(Store.email, email), _contains(Store.address, address)],
    )
    stores = list((await session.execute(stmt)).scalars().all())
    summaries = await compute_averages(session, [s.id for s in stores])

    rows = [AdminStoreRow(store=s, summary=summaries[s.id]) for s in stores]

    def sort_key(row: AdminStoreRow) -> tuple:
        if sort == "rating":
            return (row.summary.average, row.store.name.lower())
        return (str(getattr(row.store, sort)).lower(),)

    rows.sort(key=sort_key, reverse=order == "desc")
    return rows


async def get_store_summary(session: AsyncSession, store_id: int) -> RatingSummary:
    """Aggregate for one store.

    Raises:
        NotFound: Unknown store.
    """
    if await session.get(Store, store_id) is None:
        raise NotFound("Store not found")
    return await compute_average(session, store_id)


async def list_users_for_admin(
    session: AsyncSession,
    *,
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: Role | None = None,
    sort: UserSortField = "name",
    order: SortOrder = "asc",
) -> list[AdminUserRow]:
    """All users; owners carry their store id and its aggregate rating."""
    stmt = select(User).options(selectinload(User.store))
    stmt = _apply_filters(
        stmt,
        [
            _contains(User.name, name),
            _contains(User.email, email),
            _contains(User.address, address),
            User.role == role if role is not None else None,
        ],
    )
    users = list((await session.execute(stmt)).scalars().all())

    owned_store_ids = [u.store.id for u in users if u.role == Role.OWNER and u.store is not None]
    summaries = await compute_averages(session, owned_store_ids)

    rows: list[AdminUserRow] = []
    for u in users:
        if u.role == Role.OWNER and u.store is not None:
            rows.append(AdminUserRow(user=u, store_id=u.store.id, rating=summaries[u.store.id].average))
        else:
            rows.append(AdminUserRow(user=u, store_id=None, rating=None))

    def sort_key(row: AdminUserRow) -> tuple:
        if sort == "rating":
            # Non-owners (no rating) sort below every owner.
            return (row.rating if row.rating is not None else -1.0, row.user.name.lower())
        if sort == "role":
            return (row.user.role.value, row.user.name.lower())
        return (str(getattr(row.user, sort)).lower(),)

    rows.sort(key=sort_key, reverse=order == "desc")
    return rows


async def list_stores_for_user(
    session: AsyncSession,
    user_id: int,
    *,
    name: str | None = None,
    address: str | None = None,
) -> list[UserStoreRow]:
    """Stores with their overall rating and the caller's own rating, by name."""
    stmt = _apply_filters(
        select(Store).order_by(Store.name),
        [_contains(Store.name, name), _contains(Store.address, address)],
    )
    stores = list((await session.execute(stmt)).scalars().all())
    store_ids = [s.id for s in stores]

    summaries = await compute_averages(session, store_ids)
    own = await get_user_ratings(session, user_id, store_ids)

    return [UserStoreRow(store=s, summary=summaries[s.id], user_rating=own.get(s.id)) for s in stores]


async def _owned_store(session: AsyncSession, owner_id: int) -> Store:
    store = await session.scalar(select(Store).where(Store.owner_id == owner_id))
    if store is None:
        raise NotFound("Store not found")
    return store


async def get_owner_stats(session: AsyncSession, owner_id: int) -> OwnerStats:
    """Store details and aggregate for the owner's own store.

    Raises:
        NotFound: The owner has no store.
    """
    store = await _owned_store(session, owner_id)
    return OwnerStats(store=store, summary=await compute_average(session, store.id))


async def list_rating_users(session: AsyncSession, owner_id: int) -> list[RatingUserRow]:
    """Users who rated the owner's store, most recent first."""
    store = await _owned_store(session, owner_id)
    result = await session.execute(
        select(Rating)
        .options(selectinload(Rating.user))
        .where(Rating.store_id == store.id)
        .order_by(Rating.updated_at.desc(), Rating.id.desc())
    )
    return [RatingUserRow(user=r.user, rating=r.value, rated_at=r.updated_at) for r in result.scalars().all()]
