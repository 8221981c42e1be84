"""Service layer for sneakers."""
from datetime import UTC, tzinfo
from typing import Literal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.brand import Brand
from models.sneaker import Sneaker
from schemas.sneaker import SneakerCreate
from services.utils import year_bounds

SortOrder = Literal["asc", "desc"]


async def create_sneaker(db: AsyncSession, user_id: int, data: SneakerCreate) -> Sneaker:
    """
    Log a purchase for a user.

    Raises:
        sqlalchemy.exc.IntegrityError: if the user or brand does not exist.
    """
    sneaker = Sneaker(user_id=user_id, **data.model_dump())
    db.add(sneaker)
    await db.flush()
    return sneaker


async def get_year_in_sneakers(
    db: AsyncSession,
    year: int,
    order: SortOrder = "asc",
    tz: tzinfo = UTC,
) -> list[Sneaker]:
    """
    Get every sneaker purchased during ``year``, across all users.

    Args:
        db: Database session.
        year: Calendar year.
        order: Sort direction on purchase date. Ties are broken by id in the same direction.
        tz: Time zone whose calendar defines the year boundaries.

    Returns:
        Sneakers with their owner loaded (possibly empty).
    """
    if order not in ("asc", "desc"):
        raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")
    start, end = year_bounds(year, tz)
    if order == "asc":
        ordering = (Sneaker.purchase_date.asc(), Sneaker.id.asc())
    else:
        ordering = (Sneaker.purchase_date.desc(), Sneaker.id.desc())

    result = await db.execute(
        select(Sneaker)
        .options(selectinload(Sneaker.user))
        .where(Sneaker.purchase_date >= start, Sneaker.purchase_date < end)
        .order_by(*ordering)
        .execution_options(populate_existing=True),
    )
    return list(result.scalars().all())


async def get_sneakers_for_brand(db: AsyncSession, slug: str) -> list[Sneaker] | None:
    """
    Get every sneaker of a brand, newest purchase first.

    Returns:
        The sneakers with their owner loaded, or None if the brand does not exist.
    """
    brand_id = await db.scalar(select(Brand.id).where(Brand.slug == slug))
    if brand_id is None:
        return None
    result = await db.execute(
        select(Sneaker)
        .options(selectinload(Sneaker.user))
        .where(Sneaker.brand_id == brand_id)
        .order_by(Sneaker.purchase_date.desc(), Sneaker.id.desc())
        .execution_options(populate_existing=True),
    )
    return list(result.scalars().all())
