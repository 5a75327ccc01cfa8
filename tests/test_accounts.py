"""Tests for account lifecycle services."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import Role, Store, User
from rating_portal.services.accounts import (
    change_password,
    create_store_with_owner,
    create_user_as_admin,
    ensure_default_admin,
    register_user,
    validate_password_policy,
)
from rating_portal.services.errors import Conflict, InvalidCredentials, InvalidValue
from rating_portal.services.passwords import verify_password

NAME = "Account Test Person Name"


@pytest.mark.parametrize("password", ["Password1!", "Abcdefg@", "A!23456789012345"])
def test_password_policy_accepts(password: str):
    validate_password_policy(password)


@pytest.mark.parametrize(
    "password",
    [
        "Short1!",  # 7 characters
        "password1!",  # no uppercase
        "Password123",  # no special character
        "Password123456789!",  # 18 characters
        "Abcdefghijklmn!X\n",  # 17 characters with the trailing newline
        "Abcdefg!\n",
        "",
    ],
)
def test_password_policy_rejects(password: str):
    with pytest.raises(InvalidValue):
        validate_password_policy(password)


@pytest.mark.asyncio
async def test_register_always_creates_user_role(session: AsyncSession):
    user = await register_user(
        session,
        name=NAME,
        email="  New.Person@Example.com ",
        password="Password1!",
        address="1 Test Street",
    )

    assert user.role == Role.USER
    assert user.email == "new.person@example.com"
    assert user.password_hash != "Password1!"
    assert verify_password("Password1!", user.password_hash)


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(session: AsyncSession):
    await register_user(session, name=NAME, email="dup@example.com", password="Password1!", address="x")

    with pytest.raises(Conflict):
        await register_user(session, name=NAME, email="DUP@example.com", password="Password1!", address="x")


@pytest.mark.asyncio
async def test_admin_cannot_create_owner_directly(session: AsyncSession):
    with pytest.raises(InvalidValue):
        await create_user_as_admin(
            session,
            name=NAME,
            email="owner@example.com",
            password="Password1!",
            address="x",
            role=Role.OWNER,
        )
    assert await session.scalar(select(func.count(User.id))) == 0


@pytest.mark.asyncio
async def test_admin_can_create_admin(session: AsyncSession):
    admin = await create_user_as_admin(
        session,
        name=NAME,
        email="second.admin@example.com",
        password="Password1!",
        address="x",
        role=Role.ADMIN,
    )
    assert admin.role == Role.ADMIN


@pytest.mark.asyncio
async def test_store_is_created_with_its_owner(session: AsyncSession):
    store = await create_store_with_owner(
        session,
        name="Corner Shop Trading Company",
        email="shop@example.com",
        address="2 Market Square",
        password="Password1!",
    )

    owner = await session.get(User, store.owner_id)
    assert owner is not None
    assert owner.role == Role.OWNER
    assert owner.email == store.email


@pytest.mark.asyncio
async def test_store_email_taken_by_user_is_conflict(session: AsyncSession):
    await register_user(session, name=NAME, email="taken@example.com", password="Password1!", address="x")

    with pytest.raises(Conflict):
        await create_store_with_owner(
            session,
            name="Corner Shop Trading Company",
            email="taken@example.com",
            address="x",
            password="Password1!",
        )
    assert await session.scalar(select(func.count(Store.id))) == 0


@pytest.mark.asyncio
async def test_change_password(session: AsyncSession):
    user = await register_user(session, name=NAME, email="p@example.com", password="Password1!", address="x")

    with pytest.raises(InvalidCredentials):
        await change_password(session, user, current_password="Wrong123!", new_password="Newpass1!")

    with pytest.raises(InvalidValue):
        await change_password(session, user, current_password="Password1!", new_password="weak")

    await change_password(session, user, current_password="Password1!", new_password="Newpass1!")
    assert verify_password("Newpass1!", user.password_hash)


@pytest.mark.asyncio
async def test_ensure_default_admin_runs_once(session: AsyncSession):
    kwargs = dict(name="System Administrator", email="admin@example.com", password="Admin123!", address="HQ")

    first = await ensure_default_admin(session, **kwargs)
    second = await ensure_default_admin(session, **kwargs)

    assert first is not None and first.role == Role.ADMIN
    assert second is None
