"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shopfront.config import get_settings
from shopfront.database import get_db
from shopfront.errors import AuthError
from shopfront.models.user import User
from shopfront.services.auth import TokenClaims, decode_access_token, get_user_by_id

security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Get the session token from the Authorization header, falling back to the cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(get_settings().cookie_name)


def get_token_claims(
    token: Annotated[str | None, Depends(get_session_token)],
) -> TokenClaims:
    """Verify the session token and return its claims."""
    return decode_access_token(token)


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    user = get_user_by_id(db, claims.user_id)
    if user is None:
        raise AuthError("User not found")
    return user
