"""Store-owner endpoints (owner role only).

Everything here is scoped by the caller's identity; the store id is never
taken from the request.

GET /api/owner/stats        - Store details with aggregate rating
GET /api/owner/rating-users - Users who rated the store
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import User
from rating_portal.schemas import (
    OwnerStatsResponse,
    RatingUserOut,
    RatingUsersResponse,
    StoreDetails,
)
from rating_portal.services.authorization import require_owner
from rating_portal.services.directory import get_owner_stats, list_rating_users
from rating_portal.stores.postgres import get_db

router = APIRouter(dependencies=[Depends(require_owner)])

DbSession = Annotated[AsyncSession, Depends(get_db)]
StoreOwner = Annotated[User, Depends(require_owner)]


@router.get("/stats", response_model=OwnerStatsResponse)
async def stats(identity: StoreOwner, session: DbSession) -> OwnerStatsResponse:
    """Own store details, average rating and rating count."""
    result = await get_owner_stats(session, identity.id)
    return OwnerStatsResponse(
        store_details=StoreDetails.model_validate(result.store),
        average_rating=result.summary.average,
        total_ratings=result.summary.count,
    )


@router.get("/rating-users", response_model=RatingUsersResponse)
async def rating_users(identity: StoreOwner, session: DbSession) -> RatingUsersResponse:
    """Users who rated the owner's store, most recent first."""
    rows = await list_rating_users(session, identity.id)
    return RatingUsersResponse(
        users=[
            RatingUserOut(
                id=row.user.id,
                name=row.user.name,
                email=row.user.email,
                rating=row.rating,
                rated_at=row.rated_at,
            )
            for row in rows
        ]
    )
