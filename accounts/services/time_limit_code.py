"""Time-limited action codes for activation and password reset links.

A code is ``<start><lives><digest><hex(lower_name)>``:

- ``start``: issue time truncated to the minute, ``YYYYMMDDHHMM`` in UTC
- ``lives``: lifetime in minutes, six zero-padded digits
- ``digest``: HMAC-SHA1 keyed with the secret key over the fingerprint,
  start, end and lives (40 hex chars)

The fingerprint holds the user's id, target email, lower name, password
hash and rands, so changing any of them revokes every outstanding code.
Nothing is stored; verification only reads the user's current row.
"""

import hashlib
import hmac
import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from accounts.config import get_settings
from accounts.exceptions import UserNotExistError
from accounts.models.email_address import EmailAddress
from accounts.models.user import User
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y%m%d%H%M"
START_LENGTH = 12
LIVES_LENGTH = 6
DIGEST_LENGTH = 40
TIME_LIMIT_CODE_LENGTH = START_LENGTH + LIVES_LENGTH + DIGEST_LENGTH

# Tolerated clock skew between the issuing and the verifying host
CLOCK_SKEW = timedelta(minutes=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_start(start: str) -> datetime | None:
    if len(start) != START_LENGTH or not start.isdigit():
        return None
    try:
        return datetime.strptime(start, TIME_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        return None


def create_time_limit_code(
    data: str,
    minutes: int,
    start: str | None = None,
    now: datetime | None = None,
) -> str:
    """Create the fixed-length code prefix for ``data`` valid for ``minutes``."""
    if not 0 < minutes < 10**LIVES_LENGTH:
        raise ValueError(f"Code lifetime out of range: {minutes}")

    if start is None:
        start_time = (now or _utcnow()).astimezone(UTC).replace(second=0, microsecond=0)
        start = start_time.strftime(TIME_FORMAT)
    else:
        start_time = _parse_start(start)
        if start_time is None:
            raise ValueError(f"Invalid code start time: {start!r}")

    end = (start_time + timedelta(minutes=minutes)).strftime(TIME_FORMAT)
    secret = get_settings().secret_key.encode("utf-8")
    message = f"{data}{start}{end}{minutes}".encode()
    digest = hmac.new(secret, message, hashlib.sha1).hexdigest()
    return f"{start}{minutes:0{LIVES_LENGTH}d}{digest}"


def verify_time_limit_code(
    data: str,
    minutes: int,
    code: str,
    now: datetime | None = None,
) -> bool:
    """Check a code prefix against ``data`` and the freshness window.

    The window is the smaller of the lifetime embedded in the code and
    ``minutes``; a code is valid while ``now < start + window``.
    """
    if len(code) != TIME_LIMIT_CODE_LENGTH or not code.isascii() or minutes <= 0:
        return False

    start = code[:START_LENGTH]
    lives = code[START_LENGTH : START_LENGTH + LIVES_LENGTH]
    start_time = _parse_start(start)
    if start_time is None or not lives.isdigit():
        return False

    embedded_minutes = int(lives)
    if embedded_minutes <= 0:
        return False

    expected = create_time_limit_code(data, embedded_minutes, start=start)
    if not hmac.compare_digest(expected, code):
        return False

    now = (now or _utcnow()).astimezone(UTC)
    window = timedelta(minutes=min(embedded_minutes, minutes))
    if start_time > now + CLOCK_SKEW:
        return False
    return now < start_time + window


def _fingerprint(user: User, email: str | None = None) -> str:
    if email is None:
        email = user.email
    return f"{user.id}{email}{user.lower_name}{user.passwd}{user.rands}"


def issue_code(
    user: User,
    minutes: int,
    email: str | None = None,
    now: datetime | None = None,
) -> str:
    """Issue a code for ``user``; ``email`` targets a secondary address."""
    prefix = create_time_limit_code(_fingerprint(user, email), minutes, now=now)
    return prefix + user.lower_name.encode("utf-8").hex()


def get_verify_user(db: Session, code: str) -> User | None:
    """Resolve the user named by a code's suffix, without checking it."""
    if len(code) <= TIME_LIMIT_CODE_LENGTH:
        return None

    try:
        name = bytes.fromhex(code[TIME_LIMIT_CODE_LENGTH:]).decode("utf-8")
    except ValueError:
        logger.warning("Rejected code with malformed user suffix")
        return None

    try:
        return UserService(db).get_user_by_name(name)
    except UserNotExistError:
        logger.warning(f"Code refers to unknown user {name!r}")
        return None


def verify_code(
    db: Session,
    code: str,
    minutes: int,
    email: str | None = None,
    now: datetime | None = None,
) -> User | None:
    """Return the code's user if the code is authentic and still fresh."""
    user = get_verify_user(db, code)
    if user is None:
        return None

    prefix = code[:TIME_LIMIT_CODE_LENGTH]
    if verify_time_limit_code(_fingerprint(user, email), minutes, prefix, now=now):
        return user
    logger.info(f"Rejected expired or revoked code for user {user.id}")
    return None


def create_user_active_code(user: User, now: datetime | None = None) -> str:
    """Code for the account activation link."""
    return issue_code(user, get_settings().active_code_live_minutes, now=now)


def verify_user_active_code(db: Session, code: str, now: datetime | None = None) -> User | None:
    return verify_code(db, code, get_settings().active_code_live_minutes, now=now)


def create_reset_password_code(user: User, now: datetime | None = None) -> str:
    """Code for the password reset link."""
    return issue_code(user, get_settings().reset_password_code_live_minutes, now=now)


def verify_reset_password_code(db: Session, code: str, now: datetime | None = None) -> User | None:
    return verify_code(db, code, get_settings().reset_password_code_live_minutes, now=now)


def create_email_active_code(user: User, email: str, now: datetime | None = None) -> str:
    """Code for activating a secondary email address."""
    email = email.strip().lower()
    return issue_code(user, get_settings().active_code_live_minutes, email=email, now=now)


def verify_active_email_code(
    db: Session, code: str, email: str, now: datetime | None = None
) -> EmailAddress | None:
    """Return the secondary address row if the email activation code is valid."""
    email = email.strip().lower()
    user = verify_code(db, code, get_settings().active_code_live_minutes, email=email, now=now)
    if user is None:
        return None
    return (
        db.query(EmailAddress)
        .filter(EmailAddress.uid == user.id, EmailAddress.email == email)
        .first()
    )
