"""Account lifecycle: registration, admin-created users and stores, passwords.

Email uniqueness is pre-checked before creating a row; a concurrent duplicate
that slips past the check is caught by the unique index on commit and
reported the same way.
"""

import logging
import re

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import Role, Store, User
from rating_portal.services.errors import Conflict, InvalidCredentials, InvalidValue
from rating_portal.services.passwords import hash_password_async, verify_password_async

logger = logging.getLogger("uvicorn.error")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
PASSWORD_SPECIAL_CHARS = "!@#$%^&*"

_PASSWORD_PATTERN = re.compile(
    rf"(?=.*[A-Z])(?=.*[{re.escape(PASSWORD_SPECIAL_CHARS)}]).{{{PASSWORD_MIN_LENGTH},{PASSWORD_MAX_LENGTH}}}"
)

# Roles an administrator may assign directly. Owners only come with a store.
ADMIN_ASSIGNABLE_ROLES = frozenset({Role.ADMIN, Role.USER})


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password_policy(password: str) -> None:
    """Check a new password against the policy.

    Raises:
        InvalidValue: If the password is not 8-16 characters with at least one
            uppercase letter and one special character.
    """
    if not _PASSWORD_PATTERN.fullmatch(password):
        raise InvalidValue(
            f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters and include "
            f"at least one uppercase letter and one special character ({PASSWORD_SPECIAL_CHARS})"
        )


async def email_in_use(session: AsyncSession, email: str) -> bool:
    """Whether any user or store already holds this email."""
    email = normalize_email(email)
    user_taken = await session.scalar(select(exists().where(User.email == email)))
    store_taken = await session.scalar(select(exists().where(Store.email == email)))
    return bool(user_taken or store_taken)


async def _commit_new(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise Conflict("Email already in use") from e


async def create_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    address: str,
    role: Role,
) -> User:
    """Create an identity with the given role.

    Raises:
        InvalidValue: Password policy failure.
        Conflict: Email already in use.
    """
    validate_password_policy(password)
    if await email_in_use(session, email):
        raise Conflict("Email already in use")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=await hash_password_async(password),
        address=address.strip(),
        role=role,
    )
    session.add(user)
    await _commit_new(session)

    logger.info(f"User created: user_id={user.id} role={role.value}")
    return user


async def register_user(session: AsyncSession, *, name: str, email: str, password: str, address: str) -> User:
    """Self-registration. The role is always USER regardless of input."""
    return await create_user(
        session,
        name=name,
        email=email,
        password=password,
        address=address,
        role=Role.USER,
    )


async def create_user_as_admin(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    address: str,
    role: Role,
) -> User:
    """Admin-created identity; only admin and user roles may be assigned.

    Raises:
        InvalidValue: Role not assignable, or password policy failure.
        Conflict: Email already in use.
    """
    if role not in ADMIN_ASSIGNABLE_ROLES:
        raise InvalidValue("Invalid role. Must be admin or user.")
    return await create_user(
        session,
        name=name,
        email=email,
        password=password,
        address=address,
        role=role,
    )


async def create_store_with_owner(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    address: str,
    password: str,
) -> Store:
    """Create a store together with its owner identity, in one transaction.

    The owner logs in with the store email and the given password. The store
    and owner rows are flushed and committed together; neither can exist
    without the other.

    Raises:
        InvalidValue: Password policy failure.
        Conflict: Email already in use by a user or store.
    """
    validate_password_policy(password)
    if await email_in_use(session, email):
        raise Conflict("Email already in use")

    email = normalize_email(email)
    owner = User(
        name=name.strip(),
        email=email,
        password_hash=await hash_password_async(password),
        address=address.strip(),
        role=Role.OWNER,
    )
    store = Store(name=name.strip(), email=email, address=address.strip(), owner=owner)
    session.add(store)
    await _commit_new(session)

    logger.info(f"Store created: store_id={store.id} owner_id={owner.id}")
    return store


async def change_password(session: AsyncSession, identity: User, *, current_password: str, new_password: str) -> None:
    """Replace the caller's password after checking the current one.

    Tokens issued before the change remain valid until they expire.

    Raises:
        InvalidCredentials: Current password does not match.
        InvalidValue: New password fails the policy.
    """
    if not await verify_password_async(current_password, identity.password_hash):
        raise InvalidCredentials("Current password is incorrect")
    validate_password_policy(new_password)

    identity.password_hash = await hash_password_async(new_password)
    await session.commit()
    logger.info(f"Password changed: user_id={identity.id}")


async def ensure_default_admin(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    address: str,
) -> User | None:
    """Create the bootstrap administrator if no admin exists yet.

    Returns:
        The created admin, or None if an admin already exists.
    """
    has_admin = await session.scalar(select(exists().where(User.role == Role.ADMIN)))
    if has_admin:
        return None

    admin = await create_user(
        session,
        name=name,
        email=email,
        password=password,
        address=address,
        role=Role.ADMIN,
    )
    logger.info(f"Default admin created: {admin.email}")
    return admin
