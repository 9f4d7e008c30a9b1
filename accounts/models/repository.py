"""Repository ownership, watch and access models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint

from accounts.database import Base
from accounts.models.enums import AccessMode
from accounts.models.mixins import TimestampMixin


class Repository(Base, TimestampMixin):
    """Repository row, kept here only for ownership checks."""

    __tablename__ = "repositories"
    __table_args__ = (UniqueConstraint("owner_id", "lower_name", name="uq_repositories_owner_name"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    lower_name = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)


class Watch(Base):
    """A user watching a repository."""

    __tablename__ = "watches"
    __table_args__ = (UniqueConstraint("user_id", "repo_id", name="uq_watches_pair"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    repo_id = Column(Integer, ForeignKey("repositories.id"), nullable=False, index=True)


class Access(Base):
    """Repository access grant."""

    __tablename__ = "accesses"
    __table_args__ = (UniqueConstraint("user_id", "repo_id", name="uq_accesses_pair"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    repo_id = Column(Integer, ForeignKey("repositories.id"), nullable=False, index=True)
    mode = Column(Integer, nullable=False, default=AccessMode.READ)
