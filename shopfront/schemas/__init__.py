"""Pydantic schemas for API requests and responses."""

from shopfront.schemas.auth import (
    LoginResponse,
    MessageResponse,
    SignupResponse,
    UserLogin,
    UserSignup,
)
from shopfront.schemas.shop import ShopLanding, ShopResponse
from shopfront.schemas.user import UserSummary, UserWithShops

__all__ = [
    "UserSignup",
    "UserLogin",
    "SignupResponse",
    "LoginResponse",
    "MessageResponse",
    "ShopResponse",
    "ShopLanding",
    "UserSummary",
    "UserWithShops",
]
