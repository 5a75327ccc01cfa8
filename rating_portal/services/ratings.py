"""Rating upsert and aggregation.

Upsert:
1. Validate value in [1, 5] and that the store exists
2. INSERT ... ON CONFLICT (user_id, store_id) DO NOTHING RETURNING id
3. If nothing was inserted, UPDATE the existing row in place

Both statements are single atomic operations guarded by the unique constraint
on (user_id, store_id), so concurrent submissions for the same pair can never
create a second row; concurrent updates resolve last-writer-wins.

Aggregation:
- average_of() is the only definition of a store's average rating
- Averages are recomputed on every read (no caching)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import Rating, Store
from rating_portal.models.rating import RATING_MAX, RATING_MIN
from rating_portal.services.errors import InvalidValue, NotFound

logger = logging.getLogger("uvicorn.error")

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    average: float
    count: int


@dataclass(frozen=True)
class RatingUpsert:
    rating_id: int
    created: bool


EMPTY_SUMMARY = RatingSummary(average=0.0, count=0)


def average_of(total: int, count: int) -> float:
    """Average rating rounded half-up to one decimal; 0.0 when there are no ratings.

    Example:
        >>> average_of(3, 2)
        1.5
        >>> average_of(13, 3)
        4.3
    """
    if count <= 0:
        return 0.0
    avg = (Decimal(total) / Decimal(count)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return float(avg)


def validate_rating_value(value: object) -> int:
    """Return value if it is an integer in [1, 5].

    Raises:
        InvalidValue: For anything else (bools included).
    """
    if isinstance(value, bool) or not isinstance(value, int) or not RATING_MIN <= value <= RATING_MAX:
        raise InvalidValue(
            f"Rating must be between {RATING_MIN} and {RATING_MAX}",
            detail={"min": RATING_MIN, "max": RATING_MAX},
        )
    return value


def _insert_for(session: AsyncSession):
    """Dialect-specific insert() supporting ON CONFLICT."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"Rating upsert not supported on dialect {dialect!r}")


async def submit_rating(
    session: AsyncSession,
    *,
    user_id: int,
    store_id: int,
    value: object,
) -> RatingUpsert:
    """Create or update the user's rating of a store.

    Args:
        session: Database session (committed here).
        user_id: Rating user.
        store_id: Rated store.
        value: Rating value, must be an int in [1, 5].

    Returns:
        RatingUpsert with the row id and whether it was created.

    Raises:
        InvalidValue: value out of range.
        NotFound: store does not exist.
    """
    value = validate_rating_value(value)

    store_exists = await session.scalar(select(Store.id).where(Store.id == store_id))
    if store_exists is None:
        raise NotFound("Store not found")

    insert = _insert_for(session)
    insert_stmt = (
        insert(Rating)
        .values(user_id=user_id, store_id=store_id, value=value)
        .on_conflict_do_nothing(index_elements=["user_id", "store_id"])
        .returning(Rating.id)
    )
    rating_id = (await session.execute(insert_stmt)).scalar_one_or_none()
    created = rating_id is not None

    if not created:
        update_stmt = (
            update(Rating)
            .where(Rating.user_id == user_id, Rating.store_id == store_id)
            .values(value=value, updated_at=func.now())
            .returning(Rating.id)
            .execution_options(synchronize_session=False)
        )
        rating_id = (await session.execute(update_stmt)).scalar_one()

    await session.commit()

    logger.info(
        f"Rating {'created' if created else 'updated'}: "
        f"rating_id={rating_id} user_id={user_id} store_id={store_id} value={value}"
    )
    return RatingUpsert(rating_id=rating_id, created=created)


async def compute_average(session: AsyncSession, store_id: int) -> RatingSummary:
    """Average and count of all ratings for one store."""
    row = (
        await session.execute(
            select(func.count(Rating.id), func.coalesce(func.sum(Rating.value), 0)).where(
                Rating.store_id == store_id
            )
        )
    ).one()
    count, total = int(row[0]), int(row[1])
    return RatingSummary(average=average_of(total, count), count=count)


async def compute_averages(session: AsyncSession, store_ids: Iterable[int]) -> dict[int, RatingSummary]:
    """Average and count per store for many stores in one query.

    Stores with no ratings map to EMPTY_SUMMARY.
    """
    ids = list(store_ids)
    if not ids:
        return {}

    result = await session.execute(
        select(Rating.store_id, func.count(Rating.id), func.sum(Rating.value))
        .where(Rating.store_id.in_(ids))
        .group_by(Rating.store_id)
    )
    summaries = {store_id: EMPTY_SUMMARY for store_id in ids}
    for store_id, count, total in result.all():
        summaries[store_id] = RatingSummary(average=average_of(int(total), int(count)), count=int(count))
    return summaries


async def get_user_ratings(session: AsyncSession, user_id: int, store_ids: Iterable[int]) -> dict[int, int]:
    """The user's own rating value per store (stores they have not rated are absent)."""
    ids = list(store_ids)
    if not ids:
        return {}

    result = await session.execute(
        select(Rating.store_id, Rating.value).where(Rating.user_id == user_id, Rating.store_id.in_(ids))
    )
    return {store_id: value for store_id, value in result.all()}
