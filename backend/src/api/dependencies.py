"""FastAPI dependencies for injection."""
from fastapi import Request

from core.config import get_settings
from core.redis import RedisClient
from core.year_in_review_cache import YearInReviewCache
from db.session import get_async_session


def get_redis_client(request: Request) -> RedisClient:
    """Get the Redis client created at startup."""
    return request.app.state.redis_client


def get_year_in_review_cache(request: Request) -> YearInReviewCache:
    """Get the year-in-review cache created at startup."""
    return request.app.state.year_in_review_cache


__all__ = [
    "get_async_session",
    "get_redis_client",
    "get_settings",
    "get_year_in_review_cache",
]
