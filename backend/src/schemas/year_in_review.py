"""
Schemas for the year-in-review page and its cached projection.

``UserWithSneakers`` is what gets stored in Redis. Its JSON encoding is
produced by pydantic in declaration order, so two equal projections always
serialize to the same string. Changing its fields changes the cache format;
entries in the old format fail to validate and are reported as server
errors until they expire.
"""
from pydantic import BaseModel, ConfigDict

from schemas.sneaker import SneakerOut


class UserWithSneakers(BaseModel):
    """A user's username and the sneakers they bought in one year, brand included."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    sneakers: list[SneakerOut]


def to_cache(projection: UserWithSneakers) -> str:
    """Serialize a projection for storage in the cache."""
    return projection.model_dump_json()


def from_cache(data: str | bytes) -> UserWithSneakers:
    """Deserialize a cached projection. Raises ``pydantic.ValidationError`` on bad data."""
    return UserWithSneakers.model_validate_json(data)


class PageMeta(BaseModel):
    """Page title and description for the rendered view."""

    title: str
    description: str


class YearInReviewResponse(BaseModel):
    """Response body for all three outcomes; ``user`` is only set on success."""

    year: int
    user: UserWithSneakers | None = None
    meta: PageMeta
