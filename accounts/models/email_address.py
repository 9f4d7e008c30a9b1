"""Secondary email address model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from accounts.database import Base


class EmailAddress(Base):
    """Additional address registered by a user.

    The table never stores which address is primary; ``is_primary`` is
    derived from the owner's current ``email`` column.
    """

    __tablename__ = "email_addresses"

    id = Column(Integer, primary_key=True, index=True)
    uid = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    is_activated = Column(Boolean, nullable=False, default=False)

    # No backref: a synthesized, never-persisted entry may point at its owner
    user = relationship("User", lazy="joined")

    @property
    def is_primary(self) -> bool:
        """Check if this address is the owner's current primary email."""
        return self.user is not None and self.user.email == self.email
