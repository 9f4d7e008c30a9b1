"""User identity storage: registration, profile updates, lookups and deletion."""

import logging
import re

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from accounts.database import transaction
from accounts.exceptions import (
    EmailAlreadyUsedError,
    UserAlreadyExistError,
    UserHasOrgsError,
    UserNameIllegalError,
    UserNotExistError,
    UserNotKeyOwnerError,
    UserOwnReposError,
)
from accounts.models import (
    Access,
    Action,
    EmailAddress,
    Follow,
    Oauth2,
    OrgUser,
    PublicKey,
    Repository,
    User,
    Watch,
)
from accounts.models.enums import UserType
from accounts.schemas.user import UserCreate
from accounts.services.auth import encode_password, get_user_salt, hash_email, verify_password
from accounts.services.naming import is_legal_name
from accounts.services.storage import UserStorage

logger = logging.getLogger(__name__)

MAX_FIELD_LENGTH = 255

_TAG_RE = re.compile(r"<[^>]*>")


def _sanitize(value: str) -> str:
    """Strip markup from user-supplied display text."""
    return _TAG_RE.sub("", value or "").strip()


class UserService:
    """Service for user rows and their per-user directory."""

    def __init__(self, db: Session, storage: UserStorage | None = None):
        self.db = db
        self.storage = storage or UserStorage()

    # --- Uniqueness checks ---

    def is_user_exist(self, uid: int, name: str) -> bool:
        """Check if a case-folded name is taken by a user other than ``uid``."""
        if not name:
            return False
        return (
            self.db.query(User.id)
            .filter(User.id != uid, User.lower_name == name.lower())
            .first()
            is not None
        )

    def is_email_used(self, email: str) -> bool:
        """Check an address against primary and secondary emails."""
        if not email:
            return False
        email = email.strip().lower()
        if self.db.query(EmailAddress.id).filter(EmailAddress.email == email).first():
            return True
        return self.db.query(User.id).filter(User.email == email).first() is not None

    # --- Registration ---

    def create_user(self, data: UserCreate) -> User:
        """Register a new user and provision its directory atomically.

        The first user ever created becomes an active administrator.
        """
        if not is_legal_name(data.name):
            raise UserNameIllegalError()
        if self.is_user_exist(0, data.name):
            raise UserAlreadyExistError()
        if self.is_email_used(data.email):
            raise EmailAlreadyUsedError()

        salt = get_user_salt()
        user = User(
            name=data.name,
            lower_name=data.name.lower(),
            full_name=_sanitize(data.full_name),
            email=data.email,
            avatar_email=data.email,
            avatar=hash_email(data.email),
            passwd=encode_password(data.password, salt),
            salt=salt,
            rands=get_user_salt(),
            type=UserType.INDIVIDUAL,
            is_active=data.is_active,
        )

        with transaction(self.db):
            self.db.add(user)
            self.db.flush()

            if self.db.query(User.id).filter(User.id < user.id).first() is None:
                user.is_admin = True
                user.is_active = True

            self.storage.create(user.name)

        logger.info(f"Created user {user.id} ({user.name}), admin={user.is_admin}")
        return user

    # --- Profile changes ---

    def change_user_name(self, user: User, new_name: str) -> None:
        """Rename the user's directory to ``new_name``.

        The row is not touched; the caller sets ``user.name`` and saves it
        with ``update_user`` afterwards.
        """
        if not is_legal_name(new_name):
            raise UserNameIllegalError()
        if self.is_user_exist(user.id, new_name):
            raise UserAlreadyExistError()

        self.storage.rename(user.lower_name, new_name)

    def update_user(self, user: User) -> User:
        """Validate and save the pending changes on ``user``."""
        with transaction(self.db):
            self.apply_profile_rules(user)
        return user

    def apply_profile_rules(self, user: User) -> None:
        """Validate and normalize ``user`` inside the caller's transaction."""
        user.email = user.email.strip().lower()
        other_user = (
            self.db.query(User.id)
            .filter(User.id != user.id, User.type == user.type, User.email == user.email)
            .first()
        )
        other_address = (
            self.db.query(EmailAddress.id)
            .filter(EmailAddress.email == user.email, EmailAddress.uid != user.id)
            .first()
        )
        if other_user or other_address:
            raise EmailAlreadyUsedError()

        user.lower_name = user.name.lower()
        user.location = (user.location or "")[:MAX_FIELD_LENGTH]
        user.website = (user.website or "")[:MAX_FIELD_LENGTH]
        user.description = (user.description or "")[:MAX_FIELD_LENGTH]

        if not user.avatar_email:
            user.avatar_email = user.email
        user.avatar = hash_email(user.avatar_email)
        user.full_name = _sanitize(user.full_name)
        self.db.add(user)

    def change_password(self, user: User, new_password: str) -> User:
        """Set a new password; rotates salt and rands, revoking issued codes."""
        user.salt = get_user_salt()
        user.rands = get_user_salt()
        user.passwd = encode_password(new_password, user.salt)
        return self.update_user(user)

    def activate_user(self, user: User) -> User:
        """Mark the account active and rotate rands so the activation code is spent."""
        user.is_active = True
        user.rands = get_user_salt()
        return self.update_user(user)

    def authenticate_user(self, login: str, password: str) -> User | None:
        """Authenticate by user name or email and password."""
        try:
            if "@" in login:
                user = self.get_user_by_email(login)
            else:
                user = self.get_user_by_name(login)
        except UserNotExistError:
            return None

        if not verify_password(password, user.passwd, user.salt):
            return None
        return user

    # --- Deletion ---

    def get_repository_count(self, user: User) -> int:
        return self.db.query(Repository).filter(Repository.owner_id == user.id).count()

    def get_organization_count(self, user: User) -> int:
        return self.db.query(OrgUser).filter(OrgUser.uid == user.id).count()

    def delete_user(self, user: User) -> None:
        """Permanently delete a user and every row that references it.

        Dependent rows go first and the user row last, in one transaction.
        The directory is removed just before the user row; a failure at
        commit time after that point cannot restore it.
        """
        if self.get_repository_count(user) > 0:
            raise UserOwnReposError()
        if self.get_organization_count(user) > 0:
            raise UserHasOrgsError()

        user_id, user_name = user.id, user.name
        with transaction(self.db):
            self._delete_follows(user_id)
            self.db.query(Oauth2).filter(Oauth2.uid == user_id).delete()
            self.db.query(Action).filter(Action.user_id == user_id).delete()
            self.db.query(Watch).filter(Watch.user_id == user_id).delete()
            self.db.query(Access).filter(Access.user_id == user_id).delete()
            self.db.query(EmailAddress).filter(EmailAddress.uid == user_id).delete()
            self.db.query(PublicKey).filter(PublicKey.owner_id == user_id).delete()

            self.storage.remove(user_name)
            self.db.delete(user)

        logger.info(f"Deleted user {user_id} ({user_name})")

    def _delete_follows(self, user_id: int) -> None:
        """Drop follow edges in both directions, keeping the other side's counters."""
        followed_ids = [
            row.follow_id
            for row in self.db.query(Follow.follow_id).filter(Follow.user_id == user_id)
        ]
        follower_ids = [
            row.user_id
            for row in self.db.query(Follow.user_id).filter(Follow.follow_id == user_id)
        ]

        if followed_ids:
            self.db.execute(
                update(User)
                .where(User.id.in_(followed_ids))
                .values(num_followers=User.num_followers - 1)
            )
        if follower_ids:
            self.db.execute(
                update(User)
                .where(User.id.in_(follower_ids))
                .values(num_followings=User.num_followings - 1)
            )

        self.db.query(Follow).filter(
            or_(Follow.user_id == user_id, Follow.follow_id == user_id)
        ).delete()

    def delete_inactive_users(self) -> int:
        """Delete never-activated users and unactivated secondary emails.

        Users that still own repositories or belong to organizations are
        kept. Returns the number of deleted users.
        """
        inactive = (
            self.db.query(User)
            .filter(User.is_active.is_(False), User.type == UserType.INDIVIDUAL)
            .order_by(User.id)
            .all()
        )
        deleted = 0
        for user in inactive:
            if self.get_repository_count(user) or self.get_organization_count(user):
                logger.warning(f"Skipping inactive user {user.id}: still owns data")
                continue
            self.delete_user(user)
            deleted += 1

        with transaction(self.db):
            self.db.query(EmailAddress).filter(EmailAddress.is_activated.is_(False)).delete()

        logger.info(f"Deleted {deleted} inactive users")
        return deleted

    # --- Lookups ---

    def count_users(self) -> int:
        return self.db.query(User).filter(User.type == UserType.INDIVIDUAL).count()

    def get_users(self, num: int, offset: int = 0) -> list[User]:
        """Return a page of individual users ordered by id."""
        return (
            self.db.query(User)
            .filter(User.type == UserType.INDIVIDUAL)
            .order_by(User.id)
            .offset(offset)
            .limit(num)
            .all()
        )

    def get_user_by_id(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise UserNotExistError()
        return user

    def get_user_by_name(self, name: str) -> User:
        if not name:
            raise UserNotExistError()
        user = self.db.query(User).filter(User.lower_name == name.lower()).first()
        if user is None:
            raise UserNotExistError()
        return user

    def get_user_by_email(self, email: str) -> User:
        """Find a user by primary email, then by activated secondary email."""
        if not email:
            raise UserNotExistError()
        email = email.strip().lower()

        user = self.db.query(User).filter(User.email == email).order_by(User.id).first()
        if user is not None:
            return user

        address = (
            self.db.query(EmailAddress)
            .filter(EmailAddress.email == email, EmailAddress.is_activated.is_(True))
            .first()
        )
        if address is not None:
            return self.get_user_by_id(address.uid)

        raise UserNotExistError()

    def get_user_by_key_id(self, key_id: int) -> User:
        user = (
            self.db.query(User)
            .join(PublicKey, PublicKey.owner_id == User.id)
            .filter(PublicKey.id == key_id)
            .first()
        )
        if user is None:
            raise UserNotKeyOwnerError()
        return user

    def get_user_emails_by_names(self, names: list[str]) -> list[str]:
        """Primary emails of the named users; unknown names are skipped."""
        emails = []
        for name in names:
            try:
                emails.append(self.get_user_by_name(name).email)
            except UserNotExistError:
                continue
        return emails

    def get_user_ids_by_names(self, names: list[str]) -> list[int]:
        ids = []
        for name in names:
            try:
                ids.append(self.get_user_by_name(name).id)
            except UserNotExistError:
                continue
        return ids

    def search_user_by_name(self, keyword: str, limit: int = 10) -> list[User]:
        """Individual users whose name contains ``keyword``."""
        if not keyword:
            return []
        return (
            self.db.query(User)
            .filter(
                User.type == UserType.INDIVIDUAL,
                User.lower_name.like(f"%{keyword.lower()}%"),
            )
            .order_by(User.id)
            .limit(limit)
            .all()
        )
