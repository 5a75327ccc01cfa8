"""SQLAlchemy ORM models.

Models represent database tables:
- users: Identities (admin, user, owner)
- stores: Rateable stores, each paired 1:1 with an owner identity
- ratings: One rating per (user, store)
"""

from rating_portal.models.rating import Rating
from rating_portal.models.store import Store
from rating_portal.models.user import Role, User

__all__ = ["Rating", "Role", "Store", "User"]
