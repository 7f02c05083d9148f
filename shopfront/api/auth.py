"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shopfront.config import get_settings
from shopfront.database import get_db
from shopfront.schemas.auth import (
    LoginResponse,
    MessageResponse,
    SignupResponse,
    UserLogin,
    UserSignup,
)
from shopfront.schemas.user import UserSummary
from shopfront.services import auth as auth_service
from shopfront.services.users import get_user_with_shops

router = APIRouter(prefix="/auth", tags=["auth"])


def _cookie_options() -> dict:
    settings = get_settings()
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "lax",
        "domain": settings.cookie_domain,
    }


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user together with their shops."""
    user = auth_service.create_user_with_shops(
        db, user_data.username, user_data.password, user_data.shop_names
    )
    return SignupResponse(
        message="User created successfully",
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with username and password.

    The token is returned in the body and also set as an httpOnly cookie on
    the parent domain so shop subdomains share the session.
    """
    user, issued = auth_service.login(
        db, credentials.username, credentials.password, credentials.remember_me
    )
    lifetime, _ = auth_service.session_lifetime(credentials.remember_me)

    response.set_cookie(
        get_settings().cookie_name,
        issued.token,
        max_age=int(lifetime.total_seconds()),
        **_cookie_options(),
    )

    return LoginResponse(
        message="Login successful",
        user=get_user_with_shops(db, user.id),
        token=issued.token,
        expires_in=issued.expires_in,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Logout by clearing the session cookie (clients should discard their token)."""
    response.delete_cookie(get_settings().cookie_name, **_cookie_options())
    return MessageResponse(message="Logout successful")
