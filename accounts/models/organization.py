"""Organization membership model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, UniqueConstraint

from accounts.database import Base


class OrgUser(Base):
    """Membership of a user in an organization account."""

    __tablename__ = "org_users"
    __table_args__ = (UniqueConstraint("uid", "org_id", name="uq_org_users_pair"),)

    id = Column(Integer, primary_key=True, index=True)
    uid = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    org_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=False)
    is_owner = Column(Boolean, nullable=False, default=False)
