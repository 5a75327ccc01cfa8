"""End-user endpoints (user role only).

GET  /api/user/stores  - Stores with overall rating and the caller's own rating
POST /api/user/ratings - Submit or update a rating (201 created / 200 updated)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import User
from rating_portal.schemas import (
    RatingSubmitRequest,
    RatingSubmitResponse,
    UserStoreListResponse,
    UserStoreOut,
)
from rating_portal.services.authorization import require_user
from rating_portal.services.directory import list_stores_for_user
from rating_portal.services.ratings import submit_rating
from rating_portal.stores.postgres import get_db

router = APIRouter(dependencies=[Depends(require_user)])

DbSession = Annotated[AsyncSession, Depends(get_db)]
EndUser = Annotated[User, Depends(require_user)]


@router.get("/stores", response_model=UserStoreListResponse)
async def list_stores(
    identity: EndUser,
    session: DbSession,
    name: str | None = Query(default=None, max_length=60),
    address: str | None = Query(default=None, max_length=400),
) -> UserStoreListResponse:
    """List stores for the rating page, optionally searched by name/address."""
    rows = await list_stores_for_user(session, identity.id, name=name, address=address)
    return UserStoreListResponse(
        stores=[
            UserStoreOut(
                id=row.store.id,
                name=row.store.name,
                address=row.store.address,
                overall_rating=row.summary.average,
                rating_count=row.summary.count,
                user_rating=row.user_rating,
            )
            for row in rows
        ]
    )


@router.post("/ratings", response_model=RatingSubmitResponse, status_code=status.HTTP_201_CREATED)
async def rate_store(
    request: RatingSubmitRequest,
    response: Response,
    identity: EndUser,
    session: DbSession,
) -> RatingSubmitResponse:
    """Submit a rating; resubmitting for the same store updates it in place.

    Raises:
        400 INVALID_VALUE: Value outside 1-5.
        404 NOT_FOUND: Unknown store.
    """
    result = await submit_rating(
        session,
        user_id=identity.id,
        store_id=request.store_id,
        value=request.value,
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return RatingSubmitResponse(
        message="Rating submitted successfully" if result.created else "Rating updated successfully",
        rating_id=result.rating_id,
        created=result.created,
    )
