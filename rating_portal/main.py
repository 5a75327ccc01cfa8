"""FastAPI application entry point.

Store Rating Portal API - role-based store ratings.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rating_portal.routes import api_router
from rating_portal.schemas import ErrorDetail, ErrorResponse
from rating_portal.services.accounts import ensure_default_admin
from rating_portal.services.errors import PortalError, Unauthenticated
from rating_portal.settings import get_settings
from rating_portal.stores.postgres import close_db, create_tables, get_session, init_db, ping_db

logger = logging.getLogger("uvicorn.error")


async def bootstrap_database() -> None:
    """Connect, optionally create tables, and make sure an admin exists."""
    settings = get_settings()

    await init_db()
    await ping_db()
    logger.info("Postgres connected")

    if settings.auto_create_tables:
        await create_tables()
        logger.info("Tables created")

    if settings.seed_default_admin:
        async with get_session() as session:
            await ensure_default_admin(
                session,
                name=settings.default_admin_name,
                email=settings.default_admin_email,
                password=settings.default_admin_password,
                address=settings.default_admin_address,
            )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup (the API still boots without a DB; requests will fail until it is back)
    try:
        await bootstrap_database()
    except Exception:
        logger.exception("Postgres init failed")

    yield

    # Shutdown
    await close_db()


def _error_response(code: str, message: str, detail: dict | None = None) -> dict:
    return ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-based store rating portal API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        """Render service errors in the structured error format."""
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_response(exc.code, exc.message, exc.detail),
            headers=headers,
        )

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=_error_response(
                "INTERNAL_ERROR",
                str(exc) if settings.debug else "Internal server error",
            ),
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "rating_portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
