"""Store model.

A store is always paired with exactly one owner identity. The pair is created
together (see services.accounts.create_store_with_owner) and never re-linked.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rating_portal.stores.postgres import Base

if TYPE_CHECKING:
    from rating_portal.models.rating import Rating
    from rating_portal.models.user import User


class Store(Base):
    """Rateable store owned by a single owner identity."""

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True)

    # 1:1 with the owner identity
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True, index=True)

    name: Mapped[str] = mapped_column(String(60), index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    address: Mapped[str] = mapped_column(String(400))

    owner: Mapped["User"] = relationship(back_populates="store")
    ratings: Mapped[list["Rating"]] = relationship(back_populates="store")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Store {self.name}>"
