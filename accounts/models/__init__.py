"""SQLAlchemy models."""

from accounts.models.action import Action
from accounts.models.email_address import EmailAddress
from accounts.models.follow import Follow
from accounts.models.oauth2 import Oauth2
from accounts.models.organization import OrgUser
from accounts.models.public_key import PublicKey
from accounts.models.repository import Access, Repository, Watch
from accounts.models.user import User

__all__ = [
    "User",
    "EmailAddress",
    "Follow",
    "Repository",
    "Watch",
    "Access",
    "OrgUser",
    "Action",
    "Oauth2",
    "PublicKey",
]
