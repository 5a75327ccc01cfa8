"""Signed, time-limited identity tokens (JWT via PyJWT).

Tokens are stateless: a token is valid iff its HMAC matches and it has not
expired. There is no server-side session table and no revocation list, so a
token stays valid until expiry even after the holder changes their password.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt

from rating_portal.models import Role, User
from rating_portal.settings import get_settings

_REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class TokenError(Exception):
    pass


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


@dataclass(frozen=True)
class TokenClaims:
    subject: int
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies tokens with a single process-wide secret."""

    def __init__(self, secret: str, ttl: timedelta, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identity: User, now: datetime | None = None) -> str:
        """Issue a token for an identity.

        Args:
            identity: User to embed (id and role).
            now: Issue time override (tests).

        Returns:
            Encoded JWT string.
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            # PyJWT requires a string subject.
            "sub": str(identity.id),
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """Verify a token and return its claims.

        The signature is checked before any claim is looked at.

        Raises:
            InvalidSignatureError: MAC mismatch.
            TokenExpiredError: Token is past its expiry.
            MalformedTokenError: Anything structurally wrong with the token.
        """
        # Expiry is checked below with one rule for both clocks: expired iff now > exp.
        options: dict[str, object] = {"require": _REQUIRED_CLAIMS, "verify_exp": False}
        if now is not None:
            options["verify_iat"] = False

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options=options,
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError("Token signature mismatch") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        try:
            subject = int(payload["sub"])
            role = Role(payload["role"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError) as e:
            raise MalformedTokenError("Invalid token claims") from e

        if (now or datetime.now(timezone.utc)) > expires_at:
            raise TokenExpiredError("Token expired")

        return TokenClaims(subject=subject, role=role, issued_at=issued_at, expires_at=expires_at)


@lru_cache
def get_token_service() -> TokenService:
    """Get the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        ttl=timedelta(minutes=settings.access_token_ttl_minutes),
        algorithm=settings.jwt_algorithm,
    )
