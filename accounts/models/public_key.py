"""SSH public key model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from accounts.database import Base
from accounts.models.mixins import TimestampMixin


class PublicKey(Base, TimestampMixin):
    """SSH key owned by a user."""

    __tablename__ = "public_keys"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    fingerprint = Column(String(255), nullable=False, index=True)
    content = Column(Text, nullable=False)
