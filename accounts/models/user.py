"""User model."""

from sqlalchemy import Boolean, Column, Integer, String, Text, UniqueConstraint

from accounts.database import Base
from accounts.models.enums import UserType
from accounts.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Individual account or organization.

    ``email`` is the primary address, used for identity and communication.
    ``rands`` is a per-user random epoch that is part of every time-limited
    code fingerprint, so rotating it revokes outstanding codes.
    """

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", "type", name="uq_users_email_type"),)

    id = Column(Integer, primary_key=True, index=True)
    lower_name = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False)
    hide_email = Column(Boolean, nullable=False, default=False)
    passwd = Column(String(255), nullable=False)
    type = Column(Integer, nullable=False, default=UserType.INDIVIDUAL)
    location = Column(String(255), nullable=False, default="")
    website = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    rands = Column(String(10), nullable=False, default="")
    salt = Column(String(10), nullable=False, default="")

    # Permissions
    is_active = Column(Boolean, nullable=False, default=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    allow_git_hook = Column(Boolean, nullable=False, default=False)

    # Avatar
    avatar = Column(String(2048), nullable=False, default="")
    avatar_email = Column(String(255), nullable=False, default="")
    use_custom_avatar = Column(Boolean, nullable=False, default=False)

    # Counters
    num_followers = Column(Integer, nullable=False, default=0)
    num_followings = Column(Integer, nullable=False, default=0)
    num_stars = Column(Integer, nullable=False, default=0)
    num_repos = Column(Integer, nullable=False, default=0)

    # Organization counters
    num_teams = Column(Integer, nullable=False, default=0)
    num_members = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
