"""Year-in-review page endpoint."""
from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings, get_year_in_review_cache
from core.config import Settings
from core.year_in_review_cache import YearInReviewCache
from schemas.year_in_review import YearInReviewResponse
from services.year_in_review_service import (
    YearInReviewFound,
    YearInReviewNotFound,
    YearInReviewServerError,
    build_page_meta,
    get_year_in_review,
)

router = APIRouter(tags=["year-in-review"])


@router.get(
    "/{username}/yir/{year}",
    response_model=YearInReviewResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": YearInReviewResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": YearInReviewResponse},
    },
)
async def year_in_review(
    username: str,
    year: int = Path(..., ge=1, le=9999),
    db: AsyncSession = Depends(get_async_session),
    cache: YearInReviewCache = Depends(get_year_in_review_cache),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Get the sneakers a user bought in a year.

    Returns 404 (with only the year) for a future year or unknown user, and
    500 (with only the year) if the cache or database fails.
    """
    result = await get_year_in_review(
        db,
        cache,
        username,
        year,
        tz=settings.tzinfo,
        cache_timeout=settings.cache_timeout_seconds,
        query_timeout=settings.query_timeout_seconds,
    )
    meta = build_page_meta(result)

    match result:
        case YearInReviewFound(user=user):
            status_code = status.HTTP_200_OK
            body = YearInReviewResponse(year=year, user=user, meta=meta)
        case YearInReviewNotFound():
            status_code = status.HTTP_404_NOT_FOUND
            body = YearInReviewResponse(year=year, meta=meta)
        case YearInReviewServerError():
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            body = YearInReviewResponse(year=year, meta=meta)

    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
