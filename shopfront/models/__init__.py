"""SQLAlchemy models."""

from shopfront.models.shop import Shop
from shopfront.models.user import User

__all__ = [
    "User",
    "Shop",
]
