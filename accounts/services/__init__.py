"""Account services."""

from accounts.services.email_service import EmailService
from accounts.services.follow_service import FollowService
from accounts.services.storage import UserStorage
from accounts.services.user_service import UserService

__all__ = ["UserService", "EmailService", "FollowService", "UserStorage"]
