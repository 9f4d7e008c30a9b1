"""External login link model."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from accounts.database import Base
from accounts.models.mixins import TimestampMixin


class Oauth2(Base, TimestampMixin):
    """Identity at an external provider linked to a local user."""

    __tablename__ = "oauth2"
    __table_args__ = (UniqueConstraint("type", "identity", name="uq_oauth2_type_identity"),)

    id = Column(Integer, primary_key=True, index=True)
    uid = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Integer, nullable=False)
    identity = Column(String(255), nullable=False)
    token = Column(String(255), nullable=False, default="")
