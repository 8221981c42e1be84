"""Pydantic schemas for sneakers."""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from schemas.brand import BrandOut
from schemas.user import OwnerName


class SneakerCreate(BaseModel):
    """Schema for logging a purchase."""

    brand_id: int
    model: str = Field(..., min_length=1, max_length=255)
    colorway: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(default=None, max_length=2048)
    price: int = Field(..., ge=0)
    retail_price: int = Field(..., ge=0)
    purchase_date: datetime
    size: Decimal = Field(..., gt=0, max_digits=4, decimal_places=1)
    sold: bool = False
    sold_date: datetime | None = None
    sold_price: int | None = Field(default=None, ge=0)


class SneakerBase(BaseModel):
    """Columns shared by every sneaker payload. Field order is part of the cache format."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    model: str
    colorway: str
    image_url: str | None
    price: int
    retail_price: int
    purchase_date: datetime
    size: Decimal
    sold: bool
    sold_date: datetime | None
    sold_price: int | None
    brand_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class SneakerOut(SneakerBase):
    """Sneaker with its brand, as listed in a year in review."""

    brand: BrandOut


class SneakerWithOwner(SneakerBase):
    """Sneaker with its owner's name, as listed in a year-range query."""

    user: OwnerName


class SneakerListResponse(BaseModel):
    """Schema for year-range and brand listings."""

    sneakers: list[SneakerWithOwner]
    total: int
