"""Shop model."""

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from shopfront.database import Base
from shopfront.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Shop(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A named tenant resource, reachable on its own subdomain."""

    __tablename__ = "shops"

    # Case-sensitive and unique across all users
    name = Column(String(255), unique=True, nullable=False, index=True)
    owner_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    owner = relationship("User", back_populates="shops")

    @property
    def owner_username(self) -> str:
        return self.owner.username
