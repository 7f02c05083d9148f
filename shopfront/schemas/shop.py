"""Shop schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict

from shopfront.schemas.base import CamelModel


class ShopResponse(CamelModel):
    """Shop response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    owner_id: UUID
    owner_username: str
    created_at: datetime


class ShopLanding(CamelModel):
    """Body served on a shop subdomain."""

    message: str
    shop_name: str
