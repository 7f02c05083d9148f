"""User schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict

from shopfront.schemas.base import CamelModel
from shopfront.schemas.shop import ShopResponse


class UserSummary(CamelModel):
    """Minimal user information."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class UserWithShops(CamelModel):
    """User information with the shops they currently own."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    created_at: datetime
    shops: list[ShopResponse] = []

    def owns(self, shop_name: str) -> bool:
        """Check whether a shop with this exact name belongs to the user."""
        return any(shop.name == shop_name for shop in self.shops)
