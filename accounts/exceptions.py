"""Error conditions raised by the account core.

Each leaf class is a distinct condition so callers can present a
field-specific message. Store errors from SQLAlchemy and filesystem errors
are not wrapped; they propagate after the transaction has been rolled back.
"""


class AccountError(Exception):
    """Base class for account core errors."""

    default_message = "Account error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(AccountError):
    default_message = "Invalid value"


class UserNameIllegalError(ValidationError):
    default_message = "User name contains illegal characters"


class FollowSelfError(ValidationError):
    default_message = "User cannot follow itself"


class ConflictError(AccountError):
    default_message = "Value already in use"


class UserAlreadyExistError(ConflictError):
    default_message = "User already exists"


class EmailAlreadyUsedError(ConflictError):
    default_message = "E-mail already used"


class NotFoundError(AccountError):
    default_message = "Not found"


class UserNotExistError(NotFoundError):
    default_message = "User does not exist"


class EmailNotExistError(NotFoundError):
    default_message = "E-mail does not exist"


class UserNotKeyOwnerError(NotFoundError):
    default_message = "User is not the owner of public key"


class PreconditionFailedError(AccountError):
    default_message = "Precondition failed"


class UserOwnReposError(PreconditionFailedError):
    default_message = "User still has ownership of repositories"


class UserHasOrgsError(PreconditionFailedError):
    default_message = "User still has membership of organizations"


class EmailNotActivatedError(PreconditionFailedError):
    default_message = "E-mail address has not been activated"
