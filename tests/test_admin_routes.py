"""Tests for /api/admin endpoints."""

import pytest
from httpx import AsyncClient

from rating_portal.models import Role


@pytest.fixture
async def admin(make_user, auth_headers) -> dict[str, str]:
    await make_user("admin@example.com", role=Role.ADMIN, name="System Administrator")
    return await auth_headers("admin@example.com")


def _store_body(email: str, name: str = "Downtown Fresh Grocery Market", **overrides) -> dict:
    body = {"name": name, "email": email, "address": "100 Main Street", "password": "Store123!"}
    body.update(overrides)
    return body


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    ["/api/admin/dashboard-stats", "/api/admin/stores", "/api/admin/users", "/api/admin/stores/1/rating"],
)
async def test_non_admin_is_forbidden(client: AsyncClient, make_user, auth_headers, path: str):
    await make_user("user@example.com")
    response = await client.get(path, headers=await auth_headers("user@example.com"))
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_dashboard_stats(client: AsyncClient, admin, make_user, make_store):
    await make_user("user@example.com")
    await make_store("shop@example.com")

    response = await client.get("/api/admin/dashboard-stats", headers=admin)
    assert response.status_code == 200
    # admin + user + store owner
    assert response.json() == {"totalUsers": 3, "totalStores": 1, "totalRatings": 0}


@pytest.mark.asyncio
async def test_create_store_creates_owner_login(client: AsyncClient, admin, auth_headers):
    response = await client.post("/api/admin/stores", json=_store_body("shop@example.com"), headers=admin)
    assert response.status_code == 201
    data = response.json()
    assert data["storeId"] > 0 and data["ownerId"] > 0

    owner = await auth_headers("shop@example.com", "Store123!")
    stats = await client.get("/api/owner/stats", headers=owner)
    assert stats.status_code == 200
    assert stats.json()["storeDetails"]["email"] == "shop@example.com"


@pytest.mark.asyncio
async def test_create_store_with_taken_email_is_conflict(client: AsyncClient, admin):
    response = await client.post("/api/admin/stores", json=_store_body("admin@example.com"), headers=admin)
    assert response.status_code == 409

    stores = await client.get("/api/admin/stores", headers=admin)
    assert stores.json()["stores"] == []


@pytest.mark.asyncio
async def test_list_stores_filters_and_sorts(client: AsyncClient, admin, make_store, make_user):
    from rating_portal.services.ratings import submit_rating
    from rating_portal.stores.postgres import get_session

    books = await make_store("books@example.com", name="Riverside Books and Coffee")
    grocery = await make_store("grocery@example.com", name="Downtown Fresh Grocery")
    rater = await make_user("rater@example.com")
    async with get_session() as s:
        await submit_rating(s, user_id=rater.id, store_id=books.id, value=5)
        await submit_rating(s, user_id=rater.id, store_id=grocery.id, value=2)

    by_name = await client.get("/api/admin/stores", headers=admin)
    assert [s["name"] for s in by_name.json()["stores"]] == [grocery.name, books.name]

    by_rating = await client.get("/api/admin/stores", params={"sort": "rating", "order": "desc"}, headers=admin)
    stores = by_rating.json()["stores"]
    assert [s["rating"] for s in stores] == [5.0, 2.0]
    assert stores[0]["owner"]["email"] == "books@example.com"

    filtered = await client.get("/api/admin/stores", params={"name": "coffee"}, headers=admin)
    assert [s["id"] for s in filtered.json()["stores"]] == [books.id]

    bad_sort = await client.get("/api/admin/stores", params={"sort": "password"}, headers=admin)
    assert bad_sort.status_code == 422


@pytest.mark.asyncio
async def test_store_rating_unknown_store(client: AsyncClient, admin):
    response = await client.get("/api/admin/stores/999/rating", headers=admin)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_create_user_roles(client: AsyncClient, admin):
    body = {
        "name": "Benjamin Carter Holloway",
        "email": "ben@example.com",
        "password": "Password1!",
        "address": "48 Oak Avenue",
    }

    owner = await client.post("/api/admin/users", json={**body, "role": "owner"}, headers=admin)
    assert owner.status_code == 400

    unknown = await client.post("/api/admin/users", json={**body, "role": "superuser"}, headers=admin)
    assert unknown.status_code == 422

    created = await client.post("/api/admin/users", json={**body, "role": "admin"}, headers=admin)
    assert created.status_code == 201
    assert created.json()["userId"] > 0


@pytest.mark.asyncio
async def test_list_users_with_role_filter(client: AsyncClient, admin, make_user, make_store):
    await make_user("user@example.com")
    store = await make_store("shop@example.com")

    everyone = await client.get("/api/admin/users", headers=admin)
    assert len(everyone.json()["users"]) == 3

    owners = await client.get("/api/admin/users", params={"role": "owner"}, headers=admin)
    rows = owners.json()["users"]
    assert len(rows) == 1
    assert rows[0]["storeId"] == store.id
    assert rows[0]["rating"] == 0.0

    users = await client.get("/api/admin/users", params={"role": "user"}, headers=admin)
    assert [u["email"] for u in users.json()["users"]] == ["user@example.com"]
    assert users.json()["users"][0]["rating"] is None
