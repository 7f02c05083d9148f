"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopfront.api.dependencies import get_current_user
from shopfront.database import get_db
from shopfront.models.user import User
from shopfront.schemas.user import UserWithShops
from shopfront.services.users import get_user_with_shops

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserWithShops)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information and the shops they own."""
    return get_user_with_shops(db, current_user.id)
