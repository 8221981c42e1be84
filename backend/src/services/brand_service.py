"""Service layer for brands."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.brand import Brand
from schemas.brand import BrandCreate
from services.utils import slugify


async def create_brand(db: AsyncSession, data: BrandCreate) -> Brand:
    """
    Create a brand, deriving the slug from the name if none is given.

    Raises:
        ValueError: if no slug can be derived from the name.
        sqlalchemy.exc.IntegrityError: if the name or slug is already taken.
    """
    slug = data.slug or slugify(data.name)
    if not slug:
        raise ValueError(f"Cannot derive a slug from brand name {data.name!r}")
    brand = Brand(name=data.name, slug=slug)
    db.add(brand)
    await db.flush()
    return brand


async def get_brand_by_slug(db: AsyncSession, slug: str) -> Brand | None:
    """Get a brand by its unique slug."""
    result = await db.execute(select(Brand).where(Brand.slug == slug))
    return result.scalar_one_or_none()


async def list_brands(db: AsyncSession) -> list[Brand]:
    """List all brands ordered by name."""
    result = await db.execute(select(Brand).order_by(Brand.name))
    return list(result.scalars().all())
