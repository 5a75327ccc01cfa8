"""Role-based authorization.

Route tables are static: each router declares which roles may call it and
the guard admits a request iff the caller's role is in that set.
"""

from collections.abc import Collection

from rating_portal.models import Role, User
from rating_portal.services.authentication import CurrentIdentity
from rating_portal.services.errors import Forbidden

ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})
USER_ONLY: frozenset[Role] = frozenset({Role.USER})
OWNER_ONLY: frozenset[Role] = frozenset({Role.OWNER})


def is_allowed(role: Role, allowed: Collection[Role]) -> bool:
    """Return True if role is one of the allowed roles."""
    return role in allowed


class RoleGuard:
    """FastAPI dependency admitting only identities with an allowed role.

    Usage:
        router = APIRouter(dependencies=[Depends(require_admin)])

        @router.get("/x")
        async def x(identity: Annotated[User, Depends(require_admin)]): ...
    """

    def __init__(self, allowed: Collection[Role]) -> None:
        self.allowed = frozenset(allowed)

    async def __call__(self, identity: CurrentIdentity) -> User:
        if not is_allowed(identity.role, self.allowed):
            raise Forbidden()
        return identity


require_admin = RoleGuard(ADMIN_ONLY)
require_user = RoleGuard(USER_ONLY)
require_owner = RoleGuard(OWNER_ONLY)
