"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.brand import Brand
from models.sneaker import Sneaker
from models.user import User

__all__ = [
    "Base",
    "Brand",
    "Sneaker",
    "TimestampMixin",
    "User",
]
