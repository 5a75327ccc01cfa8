"""User model.

Every authenticated principal is a row here: administrators, end users and
store owners. The role is chosen at creation and never changes afterwards.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rating_portal.stores.postgres import Base

if TYPE_CHECKING:
    from rating_portal.models.rating import Rating
    from rating_portal.models.store import Store


class Role(PyEnum):
    """Closed set of user roles."""

    ADMIN = "admin"
    USER = "user"
    OWNER = "owner"


class User(Base):
    """Portal identity with exactly one role."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(60))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(400))

    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role"),
        default=Role.USER,
        index=True,
    )

    # Relations
    store: Mapped["Store | None"] = relationship(back_populates="owner", uselist=False)
    ratings: Mapped[list["Rating"]] = relationship(back_populates="user")

    # Timestamps
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
        return f"<User {self.email} ({self.role.value})>"
