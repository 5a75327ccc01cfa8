"""Password hashing backed by bcrypt.

bcrypt embeds a random per-call salt and the cost factor in the hash string,
so verification needs nothing but the stored value. Hashing is CPU-bound;
async callers go through the *_async helpers which run it in a worker thread.
"""

import asyncio
from functools import lru_cache

import bcrypt

from rating_portal.settings import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password.

    Args:
        password: Plain-text password.
        rounds: bcrypt cost factor (defaults to settings.bcrypt_rounds).

    Returns:
        bcrypt hash string ($2b$...).
    """
    cost = rounds or get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain-text password against a stored hash.

    Returns False for any malformed or foreign hash instead of raising.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@lru_cache
def dummy_hash() -> str:
    """Hash compared against when the account does not exist (timing equalizer)."""
    return hash_password("not-a-real-password")


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, hashed: str) -> bool:
    return await asyncio.to_thread(verify_password, password, hashed)
