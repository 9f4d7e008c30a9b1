"""Tests for password hashing and random salts."""

import string

import pytest

from accounts.services.auth import (
    PASSWORD_KEY_LENGTH,
    encode_password,
    get_random_string,
    get_user_salt,
    hash_email,
    verify_password,
)


@pytest.mark.parametrize(
    "password,salt",
    [("password123", "abcdefghij"), ("", "0123456789"), ("pässwörd ✓", "ZZZZZZZZZZ")],
)
def test_verify_encoded_password(password, salt):
    """Test that a derived hash verifies with the same password and salt."""
    hashed = encode_password(password, salt)
    assert verify_password(password, hashed, salt)


def test_verify_rejects_altered_password_or_salt():
    """Test that changing either input breaks verification."""
    hashed = encode_password("password123", "abcdefghij")
    assert not verify_password("password124", hashed, "abcdefghij")
    assert not verify_password("password123", hashed, "abcdefghik")


def test_encode_password_is_deterministic_lowercase_hex():
    """Test hash format: 50 bytes rendered as lowercase hex."""
    first = encode_password("secret", "salt123456")
    second = encode_password("secret", "salt123456")
    assert first == second
    assert len(first) == PASSWORD_KEY_LENGTH * 2
    assert set(first) <= set(string.hexdigits.lower())


def test_encode_password_known_vector():
    """Test the derivation against hashlib's PBKDF2 implementation."""
    import hashlib

    expected = hashlib.pbkdf2_hmac("sha256", b"gogs", b"ABCDEFGHIJ", 10000, 50).hex()
    assert encode_password("gogs", "ABCDEFGHIJ") == expected


def test_random_string_length_and_alphabet():
    """Test random strings use only alphanumeric characters."""
    value = get_random_string(32)
    assert len(value) == 32
    assert value.isalnum()
    assert value.isascii()


def test_user_salt_values_differ():
    """Test user salts are ten characters and not repeated."""
    salts = {get_user_salt() for _ in range(20)}
    assert len(salts) == 20
    assert all(len(salt) == 10 for salt in salts)


def test_hash_email_normalizes_address():
    """Test avatar keys ignore case and surrounding whitespace."""
    assert hash_email(" Alice@Example.com ") == hash_email("alice@example.com")
    assert len(hash_email("alice@example.com")) == 32
