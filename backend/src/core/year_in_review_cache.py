"""Cache for per-user year-in-review projections."""
import logging
from typing import TYPE_CHECKING

from schemas.year_in_review import UserWithSneakers, from_cache, to_cache

if TYPE_CHECKING:
    from core.redis import RedisClient

logger = logging.getLogger(__name__)


class YearInReviewCache:
    """
    Cache for the year-in-review page.

    Entries are keyed by username and year and live for a fixed TTL. Nothing
    invalidates them when a user's sneakers change, so the page can be up to
    ``ttl`` seconds stale.
    """

    DEFAULT_TTL = 300  # 5 minutes

    def __init__(self, redis_client: "RedisClient", ttl: int = DEFAULT_TTL) -> None:
        """Initialize year-in-review cache with Redis client."""
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._redis = redis_client
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        """Lifetime of an entry in seconds."""
        return self._ttl

    @staticmethod
    def cache_key(username: str, year: int) -> str:
        """Generate cache key for a user's year."""
        return f"{username}.yir.{year}"

    async def get(self, username: str, year: int) -> UserWithSneakers | None:
        """
        Get a cached projection.

        Returns:
            UserWithSneakers if found in cache, None on cache miss.

        Raises:
            pydantic.ValidationError: if the stored payload does not match the schema.
        """
        key = self.cache_key(username, year)
        data = await self._redis.get(key)
        if data:
            logger.debug("year_in_review_cache_hit key=%s", key)
            return from_cache(data)
        logger.debug("year_in_review_cache_miss key=%s", key)
        return None

    async def set(self, username: str, year: int, projection: UserWithSneakers) -> None:
        """Store a projection with the configured TTL."""
        key = self.cache_key(username, year)
        await self._redis.setex(key, self._ttl, to_cache(projection))
        logger.debug("year_in_review_cache_set key=%s ttl=%s", key, self._ttl)

    async def invalidate(self, username: str, year: int) -> None:
        """Drop a cached projection."""
        key = self.cache_key(username, year)
        await self._redis.delete(key)
        logger.debug("year_in_review_cache_invalidate key=%s", key)
