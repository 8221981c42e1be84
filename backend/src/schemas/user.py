"""Pydantic schemas for users."""
from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for creating a user."""

    email: str = Field(..., min_length=3, max_length=255)
    username: str = Field(..., min_length=1, max_length=100)
    given_name: str = Field(..., max_length=100)
    family_name: str = Field(..., max_length=100)
    full_name: str | None = Field(default=None, max_length=255)
    password: str = Field(..., min_length=1)


class OwnerName(BaseModel):
    """Owner fields exposed alongside each sneaker in year-range listings."""

    model_config = ConfigDict(from_attributes=True)

    given_name: str
    family_name: str
