"""Request authentication and login.

get_current_identity is the FastAPI dependency every protected route goes
through. It fails closed: any problem with the bearer token, or an identity
that no longer exists, ends the request with 401 before any handler runs.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import User
from rating_portal.services.errors import InvalidCredentials, Unauthenticated
from rating_portal.services.passwords import dummy_hash, verify_password_async
from rating_portal.services.tokens import TokenError, TokenService, get_token_service
from rating_portal.stores.postgres import get_db

logger = logging.getLogger("uvicorn.error")

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class LoginResult:
    token: str
    identity: User


async def authenticate_token(session: AsyncSession, token: str, tokens: TokenService) -> User:
    """Resolve the identity behind a bearer token.

    Raises:
        Unauthenticated: Token invalid/expired/malformed or identity missing.
    """
    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.debug(f"Token rejected: {type(e).__name__}")
        raise Unauthenticated() from e

    identity = await session.get(User, claims.subject)
    if identity is None or identity.role != claims.role:
        # Stale token: do not trust the payload once the record disagrees.
        raise Unauthenticated()
    return identity


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """FastAPI dependency: authenticated identity for this request."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return await authenticate_token(session, credentials.credentials, get_token_service())


CurrentIdentity = Annotated[User, Depends(get_current_identity)]


async def login(session: AsyncSession, email: str, password: str) -> LoginResult:
    """Check credentials and issue a token.

    Unknown email and wrong password are indistinguishable to the caller:
    both run one bcrypt check and raise the same error.

    Raises:
        InvalidCredentials: On any credential mismatch.
    """
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    identity = result.scalar_one_or_none()

    stored_hash = identity.password_hash if identity is not None else dummy_hash()
    password_ok = await verify_password_async(password, stored_hash)

    if identity is None or not password_ok:
        logger.warning("Login failed")
        raise InvalidCredentials()

    token = get_token_service().issue(identity)
    logger.info(f"Login ok: user_id={identity.id} role={identity.role.value}")
    return LoginResult(token=token, identity=identity)
