"""Brand browsing endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from schemas.brand import BrandListResponse, BrandOut
from schemas.sneaker import SneakerListResponse, SneakerWithOwner
from services.brand_service import list_brands
from services.sneaker_service import get_sneakers_for_brand

router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("/", response_model=BrandListResponse)
async def list_all_brands(
    db: AsyncSession = Depends(get_async_session),
) -> BrandListResponse:
    """Get all brands, sorted by name."""
    brands = await list_brands(db)
    return BrandListResponse(brands=[BrandOut.model_validate(b) for b in brands])


@router.get("/{slug}/sneakers", response_model=SneakerListResponse)
async def list_brand_sneakers(
    slug: str,
    db: AsyncSession = Depends(get_async_session),
) -> SneakerListResponse:
    """
    Get every sneaker of a brand, newest purchase first.

    Returns 404 if the brand doesn't exist.
    """
    sneakers = await get_sneakers_for_brand(db, slug)
    if sneakers is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    return SneakerListResponse(
        sneakers=[SneakerWithOwner.model_validate(s) for s in sneakers],
        total=len(sneakers),
    )
