"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from shopfront.database import Base
from shopfront.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """User model for authentication and shop ownership."""

    __tablename__ = "users"

    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    shops = relationship(
        "Shop",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Shop.created_at",
    )
