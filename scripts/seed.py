#!/usr/bin/env python3
"""Seed database with initial data.

Creates:
- The default administrator (from settings)
- Sample end users
- Sample stores, each with its owner login

Seed script is idempotent: rows whose email already exists are skipped.

Usage:
    python -m scripts.seed
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession

from rating_portal.models import Role
from rating_portal.services.accounts import (
    create_store_with_owner,
    create_user,
    email_in_use,
    ensure_default_admin,
)
from rating_portal.settings import get_settings
from rating_portal.stores.postgres import close_db, create_tables, get_session, init_db

load_dotenv()

# ============================================================
# Sample data
# ============================================================
# Names are 20-60 characters and passwords follow the login policy,
# so every seeded account can actually sign in.

SAMPLE_USERS = [
    {
        "name": "Alexandra Johnson Whitaker",
        "email": "alexandra@example.com",
        "password": "Password1!",
        "address": "12 Maple Street, Springfield",
    },
    {
        "name": "Benjamin Carter Holloway",
        "email": "benjamin@example.com",
        "password": "Password1!",
        "address": "48 Oak Avenue, Riverside",
    },
    {
        "name": "Catherine Elizabeth Moore",
        "email": "catherine@example.com",
        "password": "Password1!",
        "address": "7 Birch Lane, Lakeside",
    },
]

SAMPLE_STORES = [
    {
        "name": "Downtown Fresh Grocery Market",
        "email": "grocery@example.com",
        "password": "Store123!",
        "address": "100 Main Street, Springfield",
    },
    {
        "name": "Riverside Books and Coffee House",
        "email": "books@example.com",
        "password": "Store123!",
        "address": "5 River Road, Riverside",
    },
    {
        "name": "Lakeside Hardware and Garden Supply",
        "email": "hardware@example.com",
        "password": "Store123!",
        "address": "230 Shore Drive, Lakeside",
    },
]


async def seed_database() -> None:
    """Main seed function."""
    settings = get_settings()

    print(f"🌱 Seeding database: {settings.async_database_url.split('@')[-1]}")

    await init_db()
    try:
        if settings.auto_create_tables:
            await create_tables()

        async with get_session() as session:
            print("\n👤 Seeding default admin...")
            await seed_admin(session)

            print("\n🙋 Seeding users...")
            await seed_users(session)

            print("\n🏬 Seeding stores...")
            await seed_stores(session)
    finally:
        await close_db()

    print("\n✅ Seed complete!")


async def seed_admin(session: AsyncSession) -> None:
    """Create the default administrator if no admin exists."""
    settings = get_settings()
    admin = await ensure_default_admin(
        session,
        name=settings.default_admin_name,
        email=settings.default_admin_email,
        password=settings.default_admin_password,
        address=settings.default_admin_address,
    )
    if admin is None:
        print("  ⏭️  admin (exists)")
    else:
        print(f"  ✅ {admin.email}")


async def seed_users(session: AsyncSession) -> None:
    """Seed sample end users."""
    for u in SAMPLE_USERS:
        if await email_in_use(session, u["email"]):
            print(f"  ⏭️  {u['email']} (exists)")
            continue

        user = await create_user(session, role=Role.USER, **u)
        print(f"  ✅ {user.email}")


async def seed_stores(session: AsyncSession) -> None:
    """Seed sample stores together with their owners."""
    for s in SAMPLE_STORES:
        if await email_in_use(session, s["email"]):
            print(f"  ⏭️  {s['name']} (exists)")
            continue

        store = await create_store_with_owner(session, **s)
        print(f"  ✅ {store.name} (owner_id={store.owner_id})")


if __name__ == "__main__":
    asyncio.run(seed_database())
