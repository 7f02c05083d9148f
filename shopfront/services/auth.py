"""Authentication service for JWT, password handling and signup."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopfront import policy
from shopfront.config import get_settings
from shopfront.errors import AuthError, AuthErrorReason, ConflictError, ValidationError
from shopfront.models.shop import Shop
from shopfront.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed session token."""

    token: str
    expires_at: datetime
    expires_in: str


@dataclass(frozen=True)
class TokenClaims:
    """Identity recovered from a verified session token."""

    user_id: UUID
    username: str
    issued_at: datetime
    expires_at: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def session_lifetime(remember_me: bool) -> tuple[timedelta, str]:
    """Return the token lifetime and its label (``"24h"`` or ``"7d"``)."""
    if remember_me:
        days = settings.remember_me_ttl_days
        return timedelta(days=days), f"{days}d"
    hours = settings.session_ttl_hours
    return timedelta(hours=hours), f"{hours}h"


def create_access_token(
    user_id: UUID,
    username: str,
    remember_me: bool = False,
    now: datetime | None = None,
) -> IssuedToken:
    """Create a JWT access token."""
    issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
    lifetime, label = session_lifetime(remember_me)
    expire = issued_at + lifetime
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return IssuedToken(token=encoded_jwt, expires_at=expire, expires_in=label)


def decode_access_token(token: str | None, now: datetime | None = None) -> TokenClaims:
    """Decode and validate a JWT token.

    A token is rejected from the exact second its ``exp`` claim names.

    Raises:
        AuthError: If the token is missing, malformed, badly signed or expired
    """
    if not token:
        raise AuthError("Authentication required")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
        user_id = UUID(payload["sub"])
        username = str(payload["username"])
        issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
    except (JWTError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Rejected session token: {e}")
        raise AuthError("Invalid authentication credentials") from e

    if (now or datetime.now(UTC)) >= expires_at:
        raise AuthError("Authentication token has expired")

    return TokenClaims(
        user_id=user_id,
        username=username,
        issued_at=issued_at,
        expires_at=expires_at,
    )


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: UUID) -> User | None:
    """Get a user by id."""
    return db.get(User, user_id)


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Authenticate a user by username and password.

    Unknown usernames still pay for a hash verification so both failure paths
    take the same time.

    Raises:
        AuthError: If the username is unknown or the password does not match
    """
    user = get_user_by_username(db, username)
    if user is None:
        pwd_context.dummy_verify()
        raise AuthError("Invalid credentials", AuthErrorReason.INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials", AuthErrorReason.INVALID_CREDENTIALS)
    return user


def login(
    db: Session, username: str, password: str, remember_me: bool = False
) -> tuple[User, IssuedToken]:
    """Verify credentials and issue a session token for the user."""
    try:
        user = authenticate_user(db, username, password)
    except AuthError:
        logger.warning(f"Failed login for username '{username}'")
        raise

    issued = create_access_token(user.id, user.username, remember_me=remember_me)
    logger.info(f"User {user.id} logged in (expires in {issued.expires_in})")
    return user, issued


def create_user_with_shops(
    db: Session, username: str, password: str, shop_names: list[str]
) -> User:
    """Create a user and all of their shops in one transaction.

    Every rule violation is reported at once. Nothing is written unless the
    user and every shop can be stored.

    Raises:
        ValidationError: If the input breaks the signup rules
        ConflictError: If the username or any shop name is taken
    """
    errors = policy.validate_signup(username, password, shop_names)
    if errors:
        raise ValidationError(errors)

    names = list(dict.fromkeys(shop_names))

    conflicts = []
    if get_user_by_username(db, username) is not None:
        conflicts.append("Username already exists")
    taken = set(db.scalars(select(Shop.name).where(Shop.name.in_(names))))
    conflicts.extend(f"Shop name '{name}' already exists" for name in names if name in taken)
    if conflicts:
        raise ConflictError(conflicts)

    user = User(username=username, password_hash=get_password_hash(password))
    user.shops = [Shop(name=name) for name in names]
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as e:
        # A concurrent signup may have claimed a name after the checks above
        db.rollback()
        logger.error(f"Signup for '{username}' rolled back: {e}")
        raise ConflictError("Failed to create user and shops") from e

    db.refresh(user)
    logger.info(f"Created user {user.id} with {len(names)} shops")
    return user
