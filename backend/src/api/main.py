"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import brands, health, sneakers, year_in_review
from core.config import get_settings
from core.redis import RedisClient
from core.year_in_review_cache import YearInReviewCache
from db.session import create_engine_from_settings, create_session_factory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """
    Manage application lifespan - startup and shutdown.

    Database and Redis handles are created once here and stored on
    ``app.state``; request dependencies read them from there.
    """
    app_settings = get_settings()

    # Startup: Database engine and session factory
    engine = create_engine_from_settings(app_settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Startup: Connect to Redis
    redis_client = RedisClient(
        url=app_settings.redis_url,
        enabled=app_settings.redis_enabled,
        pool_size=app_settings.redis_pool_size,
        fail_open=app_settings.redis_fail_open,
    )
    await redis_client.connect()
    app.state.redis_client = redis_client

    # Startup: Initialize year-in-review cache
    app.state.year_in_review_cache = YearInReviewCache(
        redis_client, ttl=app_settings.year_in_review_cache_ttl,
    )

    try:
        yield
    finally:
        # Shutdown: Clean up Redis and the database pool
        await redis_client.close()
        await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Sneakers API",
    description="A sneaker collection tracker with a yearly purchase review.",
    version="0.1.0",
    lifespan=lifespan,
)

# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(sneakers.router)
app.include_router(brands.router)
# Last: its /{username}/... pattern would otherwise shadow fixed prefixes
app.include_router(year_in_review.router)
