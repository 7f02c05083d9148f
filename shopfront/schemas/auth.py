"""Authentication schemas."""

from pydantic import Field

from shopfront.schemas.base import CamelModel
from shopfront.schemas.user import UserSummary, UserWithShops


class UserSignup(CamelModel):
    """User signup request.

    Only types are checked here; the signup rules live in ``shopfront.policy``
    so every violation can be reported at once.
    """

    username: str = Field(..., max_length=255, examples=["john_doe"])
    password: str = Field(..., max_length=128, examples=["SecurePass123!"])
    shop_names: list[str] = Field(
        ..., examples=[["coffee-shop", "book-store", "tech-gadgets"]]
    )


class UserLogin(CamelModel):
    """User login request."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    remember_me: bool = False


class SignupResponse(CamelModel):
    """Signup response."""

    message: str
    user: UserSummary


class LoginResponse(CamelModel):
    """Login response with token and user info."""

    status: int = 200
    message: str
    user: UserWithShops
    token: str
    expires_in: str


class MessageResponse(CamelModel):
    """Plain message response."""

    message: str
