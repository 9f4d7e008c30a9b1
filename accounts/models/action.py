"""Activity feed model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from accounts.database import Base
from accounts.models.mixins import TimestampMixin


class Action(Base, TimestampMixin):
    """Activity feed entry delivered to ``user_id``."""

    __tablename__ = "actions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    op_type = Column(Integer, nullable=False)
    act_user_name = Column(String(255), nullable=False, default="")
    repo_name = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
