"""User lookups."""

from uuid import UUID

from sqlalchemy.orm import Session

from shopfront.errors import NotFoundError
from shopfront.models.user import User
from shopfront.schemas.shop import ShopResponse
from shopfront.schemas.user import UserWithShops
from shopfront.services.shops import get_shops_for_owner


def get_user_with_shops(db: Session, user_id: UUID) -> UserWithShops:
    """Load a user together with the shops they own right now."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    shops = get_shops_for_owner(db, user.id)
    return UserWithShops(
        id=user.id,
        username=user.username,
        created_at=user.created_at,
        shops=[ShopResponse.model_validate(shop) for shop in shops],
    )
