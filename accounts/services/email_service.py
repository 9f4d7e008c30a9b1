"""Secondary email addresses and primary email promotion."""

import logging

from sqlalchemy.orm import Session

from accounts.database import transaction
from accounts.exceptions import (
    EmailAlreadyUsedError,
    EmailNotActivatedError,
    EmailNotExistError,
)
from accounts.models.email_address import EmailAddress
from accounts.services.auth import get_user_salt
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)


class EmailService:
    """Service for a user's additional email addresses."""

    def __init__(self, db: Session, user_service: UserService | None = None):
        self.db = db
        self.user_service = user_service or UserService(db)

    def get_email_addresses(self, uid: int) -> list[EmailAddress]:
        """All addresses of a user, with exactly one reported as primary.

        If the primary email has no row of its own, an unsaved entry for it
        is appended.
        """
        user = self.user_service.get_user_by_id(uid)
        emails = (
            self.db.query(EmailAddress).filter(EmailAddress.uid == uid).order_by(EmailAddress.id).all()
        )

        if not any(address.email == user.email for address in emails):
            primary = EmailAddress(uid=user.id, email=user.email, is_activated=True)
            primary.user = user
            emails.append(primary)
        return emails

    def add_email_address(self, uid: int, email: str, is_activated: bool = False) -> EmailAddress:
        """Register an additional address for a user."""
        user = self.user_service.get_user_by_id(uid)
        email = email.strip().lower()
        if self.user_service.is_email_used(email):
            raise EmailAlreadyUsedError()

        address = EmailAddress(uid=user.id, email=email, is_activated=is_activated)
        with transaction(self.db):
            self.db.add(address)
        logger.info(f"Added email address {address.id} for user {uid}")
        return address

    def activate_email(self, address: EmailAddress) -> EmailAddress:
        """Activate an address and rotate the owner's rands."""
        with transaction(self.db):
            address.is_activated = True
            self.db.add(address)

            user = self.user_service.get_user_by_id(address.uid)
            user.rands = get_user_salt()
            self.user_service.apply_profile_rules(user)
        return address

    def delete_email_address(self, uid: int, email: str) -> None:
        address = (
            self.db.query(EmailAddress)
            .filter(EmailAddress.uid == uid, EmailAddress.email == email.strip().lower())
            .first()
        )
        if address is None:
            raise EmailNotExistError()

        with transaction(self.db):
            self.db.delete(address)
        logger.info(f"Deleted email address {email} of user {uid}")

    def make_email_primary(self, uid: int, email: str) -> EmailAddress:
        """Promote an activated secondary address to the user's primary email.

        The former primary email is saved as a secondary row first, so the
        user never ends up without a recorded primary address.
        """
        address = (
            self.db.query(EmailAddress)
            .filter(EmailAddress.uid == uid, EmailAddress.email == email.strip().lower())
            .first()
        )
        if address is None:
            raise EmailNotExistError()
        if not address.is_activated:
            raise EmailNotActivatedError()

        user = self.user_service.get_user_by_id(uid)
        with transaction(self.db):
            former = (
                self.db.query(EmailAddress).filter(EmailAddress.email == user.email).first()
            )
            if former is None:
                self.db.add(
                    EmailAddress(uid=user.id, email=user.email, is_activated=user.is_active)
                )
                self.db.flush()

            user.email = address.email
            self.db.add(user)

        logger.info(f"User {uid} promoted email address {address.id} to primary")
        return address
