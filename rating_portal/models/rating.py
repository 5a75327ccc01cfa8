"""Rating model.

One row per (user, store). The unique constraint is what the rating upsert
relies on; there is no other guard against duplicates.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rating_portal.stores.postgres import Base

if TYPE_CHECKING:
    from rating_portal.models.store import Store
    from rating_portal.models.user import User

RATING_MIN = 1
RATING_MAX = 5


class Rating(Base):
    """A user's rating of a store."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_ratings_user_store"),
        CheckConstraint(f"value BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_ratings_value_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), index=True)

    value: Mapped[int] = mapped_column(Integer)

    user: Mapped["User"] = relationship(back_populates="ratings")
    store: Mapped["Store"] = relationship(back_populates="ratings")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Rating user={self.user_id} store={self.store_id} value={self.value}>"
