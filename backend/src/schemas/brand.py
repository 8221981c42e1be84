"""Pydantic schemas for brand endpoints."""
from pydantic import BaseModel, ConfigDict, Field


class BrandCreate(BaseModel):
    """Schema for creating a brand. The slug is derived from the name when omitted."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=100)


class BrandOut(BaseModel):
    """Schema for a brand as embedded in sneaker payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class BrandListResponse(BaseModel):
    """Schema for the brands list response."""

    brands: list[BrandOut]
