"""Tests for role-based authorization."""

import itertools

import pytest

from rating_portal.models import Role, User
from rating_portal.services.authorization import (
    ADMIN_ONLY,
    OWNER_ONLY,
    USER_ONLY,
    RoleGuard,
    is_allowed,
)
from rating_portal.services.errors import Forbidden

A, U, O = Role.ADMIN, Role.USER, Role.OWNER

# Allowed role set -> roles the guard must admit.
ADMITTED = {
    frozenset(): set(),
    frozenset({A}): {A},
    frozenset({U}): {U},
    frozenset({O}): {O},
    frozenset({A, U}): {A, U},
    frozenset({A, O}): {A, O},
    frozenset({U, O}): {U, O},
    frozenset({A, U, O}): {A, U, O},
}


def test_table_covers_every_role_set():
    every_set = {
        frozenset(combo) for size in range(len(Role) + 1) for combo in itertools.combinations(list(Role), size)
    }
    assert set(ADMITTED) == every_set


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("allowed", "role"),
    list(itertools.product(list(ADMITTED), list(Role))),
)
async def test_guard_matrix(allowed: frozenset[Role], role: Role):
    identity = User(id=1, role=role)
    guard = RoleGuard(allowed)

    if role in ADMITTED[allowed]:
        assert await guard(identity) is identity
    else:
        with pytest.raises(Forbidden):
            await guard(identity)


@pytest.mark.parametrize(
    ("role", "allowed", "expected"),
    [
        (A, ADMIN_ONLY, True),
        (U, ADMIN_ONLY, False),
        (O, ADMIN_ONLY, False),
        (A, USER_ONLY, False),
        (U, USER_ONLY, True),
        (O, USER_ONLY, False),
        (A, OWNER_ONLY, False),
        (U, OWNER_ONLY, False),
        (O, OWNER_ONLY, True),
    ],
)
def test_route_role_sets(role: Role, allowed: frozenset[Role], expected: bool):
    assert is_allowed(role, allowed) is expected
