"""Brand model."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.sneaker import Sneaker


class Brand(Base, TimestampMixin):
    """Sneaker brand. Name and slug are globally unique."""

    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    # No cascade: deleting a brand that still has sneakers violates the FK
    sneakers: Mapped[list["Sneaker"]] = relationship(
        back_populates="brand",
        passive_deletes="all",
    )
