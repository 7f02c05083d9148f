"""Shop lookups."""

from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from shopfront.errors import NotFoundError
from shopfront.models.shop import Shop


def find_shop_by_name(db: Session, shop_name: str) -> Shop | None:
    """Find a shop by exact (case-sensitive) name."""
    return (
        db.query(Shop)
        .options(joinedload(Shop.owner))
        .filter(Shop.name == shop_name)
        .first()
    )


def get_shop_by_name(db: Session, shop_name: str) -> Shop:
    """Get a shop by name or raise NotFoundError."""
    shop = find_shop_by_name(db, shop_name)
    if shop is None:
        raise NotFoundError(f"Shop with name '{shop_name}' not found")
    return shop


def get_shop_by_id(db: Session, shop_id: str) -> Shop:
    """Get a shop by id or raise NotFoundError.

    Ids that are not UUIDs cannot name a shop and are reported the same way.
    """
    not_found = NotFoundError(f"Shop with id '{shop_id}' not found")
    try:
        key = UUID(shop_id)
    except ValueError:
        raise not_found from None

    shop = db.query(Shop).options(joinedload(Shop.owner)).filter(Shop.id == key).first()
    if shop is None:
        raise not_found
    return shop


def get_shops_for_owner(db: Session, owner_id: UUID) -> list[Shop]:
    """Get the shops a user currently owns, oldest first."""
    return (
        db.query(Shop)
        .options(joinedload(Shop.owner))
        .filter(Shop.owner_id == owner_id)
        .order_by(Shop.created_at, Shop.name)
        .all()
    )
