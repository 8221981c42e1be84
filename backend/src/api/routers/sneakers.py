"""Sneaker listing endpoints."""
from typing import Literal

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.sneaker import SneakerListResponse, SneakerWithOwner
from services.sneaker_service import get_year_in_sneakers

router = APIRouter(prefix="/sneakers", tags=["sneakers"])


@router.get("/years/{year}", response_model=SneakerListResponse)
async def list_sneakers_for_year(
    year: int = Path(..., ge=1, le=9999),
    order: Literal["asc", "desc"] = "asc",
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> SneakerListResponse:
    """
    Get every sneaker purchased in a year, across all users.

    Each sneaker includes its owner's given and family name. Sorted by
    purchase date, ascending by default.
    """
    sneakers = await get_year_in_sneakers(db, year, order=order, tz=settings.tzinfo)
    return SneakerListResponse(
        sneakers=[SneakerWithOwner.model_validate(s) for s in sneakers],
        total=len(sneakers),
    )
