"""Follow edge model."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from accounts.database import Base


class Follow(Base):
    """Directed edge: ``user_id`` receives the activity of ``follow_id``."""

    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("user_id", "follow_id", name="uq_follows_pair"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    follow_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
