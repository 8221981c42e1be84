"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer
from testcontainers.redis import RedisContainer

from core.redis import RedisClient
from core.year_in_review_cache import YearInReviewCache
from models.base import Base
from models.brand import Brand
from models.sneaker import Sneaker
from models.user import User


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def redis_container() -> Generator[RedisContainer]:
    """Start a Redis container for the test session."""
    with RedisContainer("redis:7") as redis:
        yield redis


@pytest.fixture(scope="session")
def database_url(postgres_container: PostgresContainer) -> str:
    """
    Get the database URL from the container and set it in environment.

    This must be set before any app imports that trigger Settings validation.
    """
    url = postgres_container.get_connection_url()
    os.environ["DATABASE_URL"] = url
    # Year boundaries in tests are UTC regardless of local .env
    os.environ["TIMEZONE"] = "UTC"
    return url


@pytest.fixture(scope="session")
def redis_url(redis_container: RedisContainer) -> str:
    """Get the Redis URL from the container and set it in environment."""
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    url = f"redis://{host}:{port}/0"
    os.environ["REDIS_URL"] = url
    return url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    This provides test isolation - each test runs in its own transaction
    that is rolled back, so tests don't affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses begin_nested() for savepoints, allowing the session's flush/commit
    to work within our outer test transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def redis_client(redis_url: str) -> AsyncGenerator[RedisClient]:
    """Connected Redis client that propagates errors; the database is flushed around each test."""
    client = RedisClient(redis_url, fail_open=False)
    await client.connect()
    await client.flushdb()

    yield client

    await client.flushdb()
    await client.close()


@pytest.fixture
def year_in_review_cache(redis_client: RedisClient) -> YearInReviewCache:
    """Year-in-review cache backed by the test Redis."""
    return YearInReviewCache(redis_client, ttl=300)


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for users with unique defaults."""
    counter = count(1)

    async def _make_user(username: str | None = None, **overrides: object) -> User:
        n = next(counter)
        username = username or f"collector{n}"
        user = User(
            email=overrides.pop("email", f"{username}@example.com"),
            username=username,
            given_name=overrides.pop("given_name", "Test"),
            family_name=overrides.pop("family_name", f"User{n}"),
            full_name=overrides.pop("full_name", f"Test User{n}"),
            password=overrides.pop("password", "secret"),
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest.fixture
def make_brand(db_session: AsyncSession) -> Callable[..., Awaitable[Brand]]:
    """Factory for brands."""

    async def _make_brand(name: str = "Nike", slug: str | None = None) -> Brand:
        brand = Brand(name=name, slug=slug or name.lower().replace(" ", "-"))
        db_session.add(brand)
        await db_session.flush()
        return brand

    return _make_brand


@pytest.fixture
def make_sneaker(db_session: AsyncSession) -> Callable[..., Awaitable[Sneaker]]:
    """Factory for sneakers; ``purchase_date`` is required."""

    async def _make_sneaker(
        user: User,
        brand: Brand,
        purchase_date: datetime,
        **overrides: object,
    ) -> Sneaker:
        sneaker = Sneaker(
            user_id=user.id,
            brand_id=brand.id,
            purchase_date=purchase_date,
            model=overrides.pop("model", "Air Max 90"),
            colorway=overrides.pop("colorway", "Infrared"),
            price=overrides.pop("price", 13000),
            retail_price=overrides.pop("retail_price", 13000),
            size=overrides.pop("size", Decimal("10.5")),
            **overrides,
        )
        db_session.add(sneaker)
        await db_session.flush()
        return sneaker

    return _make_sneaker


@pytest.fixture
async def client(
    db_session: AsyncSession,
    redis_client: RedisClient,
    year_in_review_cache: YearInReviewCache,
) -> AsyncGenerator[AsyncClient]:
    """
    Create a test client with database session override.

    ASGITransport does not run the lifespan, so the handles it would create
    are placed on app.state here.
    """
    # Clear the settings cache so it picks up DATABASE_URL from environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.state.redis_client = redis_client
    app.state.year_in_review_cache = year_in_review_cache

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
