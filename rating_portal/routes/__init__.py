"""API routes."""

from fastapi import APIRouter

from rating_portal.routes import admin, auth, owner, user

api_router = APIRouter()

# Authentication (public + authenticated)
api_router.include_router(auth.router, prefix="/api/auth", tags=["auth"])

# Role-scoped endpoints
api_router.include_router(admin.router, prefix="/api/admin", tags=["admin"])
api_router.include_router(user.router, prefix="/api/user", tags=["user"])
api_router.include_router(owner.router, prefix="/api/owner", tags=["owner"])
