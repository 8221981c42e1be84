"""
Year-in-review: the sneakers one user bought in one calendar year.

The page is read-heavy, so results are served cache-aside from Redis:

1. A year after the current one is never found.
2. A cached projection under ``"<username>.yir.<year>"`` is returned as is.
3. Otherwise the user and their sneakers for the year are loaded from the
   database, stored in the cache with a fixed TTL, and returned.

``get_year_in_review`` never raises. Every outcome is one of
``YearInReviewFound``, ``YearInReviewNotFound`` or ``YearInReviewServerError``,
which the caller matches on. Concurrent misses for the same key may both
query the database; the results are identical, so the last write wins.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.year_in_review_cache import YearInReviewCache
from models.sneaker import Sneaker
from models.user import User
from schemas.sneaker import SneakerOut
from schemas.year_in_review import PageMeta, UserWithSneakers
from services.utils import year_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearInReviewFound:
    """The user exists and the year is not in the future."""

    year: int
    user: UserWithSneakers


@dataclass(frozen=True)
class YearInReviewNotFound:
    """The year is in the future or no user has the requested username."""

    year: int


@dataclass(frozen=True)
class YearInReviewServerError:
    """The lookup failed. ``cause`` is for logging only, never shown to the client."""

    year: int
    cause: Exception


YearInReviewResult = YearInReviewFound | YearInReviewNotFound | YearInReviewServerError


async def _load_user_year(
    db: AsyncSession,
    username: str,
    year: int,
    tz: tzinfo,
) -> UserWithSneakers | None:
    """Load a user's sneakers for ``year`` from the database, or None if no such user."""
    user_id = await db.scalar(select(User.id).where(User.username == username))
    if user_id is None:
        return None

    start, end = year_bounds(year, tz)
    result = await db.execute(
        select(Sneaker)
        .options(selectinload(Sneaker.brand))
        .where(
            Sneaker.user_id == user_id,
            Sneaker.purchase_date >= start,
            Sneaker.purchase_date < end,
        )
        .order_by(Sneaker.purchase_date.asc(), Sneaker.id.asc())
        .execution_options(populate_existing=True),
    )
    sneakers = [SneakerOut.model_validate(sneaker) for sneaker in result.scalars()]
    return UserWithSneakers(username=username, sneakers=sneakers)


async def get_year_in_review(
    db: AsyncSession,
    cache: YearInReviewCache,
    username: str,
    year: int,
    *,
    tz: tzinfo = UTC,
    now: datetime | None = None,
    cache_timeout: float | None = None,
    query_timeout: float | None = None,
) -> YearInReviewResult:
    """
    Get a user's year in review, reading through the cache.

    Args:
        db: Database session.
        cache: Year-in-review cache.
        username: Owner of the collection.
        year: Calendar year to review.
        tz: Time zone whose calendar defines "this year" and the year boundaries.
        now: Current time; defaults to the wall clock.
        cache_timeout: Upper bound in seconds for each cache operation (None disables).
        query_timeout: Upper bound in seconds for the database load (None disables).

    Returns:
        One of YearInReviewFound, YearInReviewNotFound or YearInReviewServerError.
    """
    current = (now or datetime.now(UTC)).astimezone(tz)
    if year > current.year:
        return YearInReviewNotFound(year=year)

    try:
        async with asyncio.timeout(cache_timeout):
            cached = await cache.get(username, year)
        if cached is not None:
            return YearInReviewFound(year=year, user=cached)

        async with asyncio.timeout(query_timeout):
            projection = await _load_user_year(db, username, year, tz)
        if projection is None:
            return YearInReviewNotFound(year=year)

        async with asyncio.timeout(cache_timeout):
            await cache.set(username, year, projection)
        return YearInReviewFound(year=year, user=projection)
    except Exception as e:
        logger.exception("Year in review failed for username=%s year=%s", username, year)
        return YearInReviewServerError(year=year, cause=e)


def build_page_meta(result: YearInReviewResult) -> PageMeta:
    """Title and description for the rendered page."""
    match result:
        case YearInReviewFound(year=year, user=user):
            count = len(user.sneakers)
            noun = "sneaker" if count == 1 else "sneakers"
            return PageMeta(
                title=f"{year} – {user.username}",
                description=f"{user.username} bought {count} {noun} in {year}",
            )
        case YearInReviewNotFound():
            return PageMeta(
                title="Page not found",
                description="We couldn't find the page you were looking for.",
            )
        case YearInReviewServerError():
            return PageMeta(
                title="Something went wrong",
                description="We couldn't load this page. Please try again later.",
            )
