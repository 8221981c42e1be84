"""Redis client with connection pooling and configurable fallback."""
import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisClient:
    """
    Async Redis client with connection pooling.

    If Redis is disabled or unreachable at connect time, reads are misses and
    writes are no-ops. Once connected, errors raised by Redis are either
    logged and swallowed (``fail_open=True``) or re-raised to the caller.

    ``connect`` is attempted once. A client that failed to connect stays
    disconnected for the life of the process, even after Redis recovers;
    restart the application (or call ``connect`` again) to re-enable caching.
    """

    def __init__(
        self,
        url: str,
        enabled: bool = True,
        pool_size: int = 20,
        fail_open: bool = True,
    ) -> None:
        self._url = url
        self._enabled = enabled
        self._pool_size = pool_size
        self._fail_open = fail_open
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None

    async def connect(self) -> None:
        """Initialize connection pool and verify connectivity."""
        if not self._enabled:
            logger.info("Redis disabled by configuration")
            return
        try:
            self._pool = ConnectionPool.from_url(self._url, max_connections=self._pool_size)
            self._client = Redis(connection_pool=self._pool)
            await self._client.ping()
            logger.info("Redis connected successfully")
        except RedisError as e:
            logger.warning("Redis connection failed, caching disabled until reconnect: %s", e)
            self._client = None
            self._pool = None

    async def close(self) -> None:
        """Close connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._pool = None
            logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._client is not None

    def _handle_error(self, operation: str, error: RedisError) -> None:
        logger.warning("Redis %s failed: %s", operation, error)
        if not self._fail_open:
            raise error

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        if not self._client:
            return False
        try:
            return await self._client.ping()
        except RedisError:
            return False

    async def get(self, key: str) -> bytes | None:
        """Get value, returns None on a miss or if Redis is unavailable."""
        if not self._client:
            return None
        try:
            return await self._client.get(key)
        except RedisError as e:
            self._handle_error("GET", e)
            return None

    async def setex(self, key: str, seconds: int, value: str | bytes) -> bool:
        """Set value with expiry, returns False if Redis is unavailable."""
        if not self._client:
            return False
        try:
            await self._client.setex(key, seconds, value)
            return True
        except RedisError as e:
            self._handle_error("SETEX", e)
            return False

    async def ttl(self, key: str) -> int | None:
        """Remaining lifetime of a key in seconds, None if Redis is unavailable."""
        if not self._client:
            return None
        try:
            return await self._client.ttl(key)
        except RedisError as e:
            self._handle_error("TTL", e)
            return None

    async def delete(self, *keys: str) -> bool:
        """Delete key(s), returns False if Redis is unavailable."""
        if not self._client:
            return False
        try:
            await self._client.delete(*keys)
            return True
        except RedisError as e:
            self._handle_error("DELETE", e)
            return False

    async def flushdb(self) -> bool:
        """Flush current database (for testing). Returns False if unavailable."""
        if not self._client:
            return False
        try:
            await self._client.flushdb()
            return True
        except RedisError as e:
            self._handle_error("FLUSHDB", e)
            return False
