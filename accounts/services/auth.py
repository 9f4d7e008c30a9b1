"""Password hashing, salts and avatar keys."""

import hashlib
import hmac
import secrets
import string

from passlib.crypto.digest import pbkdf2_hmac

PASSWORD_ITERATIONS = 10000
PASSWORD_KEY_LENGTH = 50
SALT_LENGTH = 10

_ALPHANUM = string.digits + string.ascii_letters


def encode_password(password: str, salt: str) -> str:
    """Derive the stored password hash (PBKDF2-SHA256, lowercase hex)."""
    derived = pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        PASSWORD_ITERATIONS,
        PASSWORD_KEY_LENGTH,
    )
    return derived.hex()


def verify_password(password: str, hashed_password: str, salt: str) -> bool:
    """Verify a password against its stored hash and salt."""
    return hmac.compare_digest(encode_password(password, salt), hashed_password)


def get_random_string(length: int) -> str:
    """Return a random alphanumeric string of the given length."""
    return "".join(secrets.choice(_ALPHANUM) for _ in range(length))


def get_user_salt() -> str:
    """Return a random value for a user's salt or rands."""
    return get_random_string(SALT_LENGTH)


def hash_email(email: str) -> str:
    """Return the avatar key for an email address."""
    return hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()  # noqa: S324
