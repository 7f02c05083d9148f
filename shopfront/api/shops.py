"""Shop API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopfront.database import get_db
from shopfront.schemas.shop import ShopResponse
from shopfront.services import shops as shop_service

router = APIRouter(prefix="/shops", tags=["shops"])


@router.get("/by-name/{shop_name}", response_model=ShopResponse)
async def get_shop_by_name(
    shop_name: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Get shop details by name."""
    return shop_service.get_shop_by_name(db, shop_name)


@router.get("/{shop_id}", response_model=ShopResponse)
async def get_shop_by_id(
    shop_id: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Get shop details by id."""
    return shop_service.get_shop_by_id(db, shop_id)
