"""Sneaker model - one purchased pair."""
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.brand import Brand
    from models.user import User


class Sneaker(Base, TimestampMixin):
    """
    A sneaker in a user's collection.

    Prices are integers in the currency's minor unit (cents).
    """

    __tablename__ = "sneakers"
    __table_args__ = (
        # Year-in-review filters by owner and purchase date range
        Index("ix_sneakers_user_id_purchase_date", "user_id", "purchase_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    model: Mapped[str] = mapped_column(String(255))
    colorway: Mapped[str] = mapped_column(String(255))
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    price: Mapped[int] = mapped_column(Integer)
    retail_price: Mapped[int] = mapped_column(Integer)
    purchase_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    size: Mapped[Decimal] = mapped_column(Numeric(4, 1))
    sold: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    sold_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sold_price: Mapped[int | None] = mapped_column(Integer, nullable=True)

    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    brand: Mapped["Brand"] = relationship(back_populates="sneakers")
    user: Mapped["User"] = relationship(back_populates="sneakers")
