"""Tests for time-limited action codes."""

from datetime import UTC, datetime, timedelta

import pytest

from accounts.services.auth import get_user_salt
from accounts.services.time_limit_code import (
    TIME_LIMIT_CODE_LENGTH,
    create_email_active_code,
    create_reset_password_code,
    create_time_limit_code,
    create_user_active_code,
    get_verify_user,
    issue_code,
    verify_active_email_code,
    verify_code,
    verify_reset_password_code,
    verify_time_limit_code,
    verify_user_active_code,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
MINUTES = 30


def test_prefix_layout():
    """Test the code prefix is start stamp, lives and a 40 char digest."""
    code = create_time_limit_code("data", MINUTES, now=NOW + timedelta(seconds=42))
    assert len(code) == TIME_LIMIT_CODE_LENGTH
    assert code[:12] == "202603011200"
    assert code[12:18] == "000030"


@pytest.mark.parametrize("elapsed,valid", [(0, True), (MINUTES - 1, True), (MINUTES, False)])
def test_window_boundaries(elapsed, valid):
    """Test a code is valid until exactly `minutes` have elapsed."""
    code = create_time_limit_code("data", MINUTES, now=NOW)
    later = NOW + timedelta(minutes=elapsed)
    assert verify_time_limit_code("data", MINUTES, code, now=later) is valid


def test_rejects_other_data():
    """Test the digest binds the fingerprint data."""
    code = create_time_limit_code("data", MINUTES, now=NOW)
    assert not verify_time_limit_code("other", MINUTES, code, now=NOW)


def test_window_is_capped_by_verifier():
    """Test a shorter verification lifetime wins over the embedded one."""
    code = create_time_limit_code("data", 60, now=NOW)
    assert verify_time_limit_code("data", 60, code, now=NOW + timedelta(minutes=45))
    assert not verify_time_limit_code("data", 30, code, now=NOW + timedelta(minutes=45))


def test_rejects_code_from_the_future():
    """Test codes stamped beyond the tolerated clock skew are refused."""
    code = create_time_limit_code("data", MINUTES, now=NOW + timedelta(minutes=10))
    assert not verify_time_limit_code("data", MINUTES, code, now=NOW)


@pytest.mark.parametrize(
    "code",
    [
        "",
        "short",
        "20260301120X000030" + "0" * 40,
        "202603011200abcdef" + "0" * 40,
        "202613011200000030" + "0" * 40,
        "202603011200000000" + "0" * 40,
    ],
)
def test_malformed_prefix_fails_closed(code):
    """Test malformed prefixes are rejected without raising."""
    assert not verify_time_limit_code("data", MINUTES, code, now=NOW)


def test_tampered_lives_rejected():
    """Test extending the embedded lifetime invalidates the digest."""
    code = create_time_limit_code("data", MINUTES, now=NOW)
    forged = code[:12] + "000090" + code[18:]
    assert not verify_time_limit_code("data", 90, forged, now=NOW + timedelta(minutes=40))


def test_issue_and_verify_user_code(db, alice):
    """Test a user code resolves and verifies immediately."""
    code = issue_code(alice, MINUTES, now=NOW)
    assert code.endswith(b"alice".hex())
    assert get_verify_user(db, code).id == alice.id
    assert verify_code(db, code, MINUTES, now=NOW).id == alice.id
    assert verify_code(db, code, MINUTES, now=NOW + timedelta(minutes=MINUTES - 1)).id == alice.id
    assert verify_code(db, code, MINUTES, now=NOW + timedelta(minutes=MINUTES)) is None


def test_password_change_revokes_codes(db, alice, user_service):
    """Test a password change invalidates codes still inside their window."""
    code = issue_code(alice, MINUTES, now=NOW)
    user_service.change_password(alice, "new-password")
    assert verify_code(db, code, MINUTES, now=NOW + timedelta(minutes=1)) is None


def test_rands_rotation_revokes_codes(db, alice, user_service):
    """Test rotating rands alone invalidates outstanding codes."""
    code = issue_code(alice, MINUTES, now=NOW)
    password_hash = alice.passwd
    alice.rands = get_user_salt()
    user_service.update_user(alice)
    assert alice.passwd == password_hash
    assert verify_code(db, code, MINUTES, now=NOW) is None


def test_code_for_other_user_is_rejected(db, alice, bob):
    """Test swapping the name suffix does not transfer a code."""
    code = issue_code(alice, MINUTES, now=NOW)
    forged = code[:TIME_LIMIT_CODE_LENGTH] + b"bob".hex()
    assert get_verify_user(db, forged).id == bob.id
    assert verify_code(db, forged, MINUTES, now=NOW) is None


@pytest.mark.parametrize(
    "suffix",
    ["", "zz", "abc", b"nobody".hex(), "ff"],
)
def test_unresolvable_codes_return_none(db, alice, suffix):
    """Test short codes, bad hex and unknown users fail closed."""
    code = issue_code(alice, MINUTES, now=NOW)[:TIME_LIMIT_CODE_LENGTH] + suffix
    assert get_verify_user(db, code) is None
    assert verify_code(db, code, MINUTES, now=NOW) is None


def test_activation_code_is_spent_by_activation(db, admin, make_user, user_service):
    """Test activating an account invalidates its activation code."""
    carol = make_user("carol")
    assert not carol.is_active

    code = create_user_active_code(carol, now=NOW)
    user = verify_user_active_code(db, code, now=NOW + timedelta(minutes=5))
    assert user.id == carol.id

    user_service.activate_user(user)
    assert user.is_active
    assert verify_user_active_code(db, code, now=NOW + timedelta(minutes=5)) is None


def test_reset_password_code(db, alice):
    """Test reset codes verify with the reset lifetime."""
    code = create_reset_password_code(alice, now=NOW)
    assert verify_reset_password_code(db, code, now=NOW + timedelta(minutes=10)).id == alice.id
    assert verify_reset_password_code(db, code, now=NOW + timedelta(days=1)) is None


def test_email_activation_code(db, alice, email_service):
    """Test email activation codes are bound to the target address."""
    email_service.add_email_address(alice.id, "alice.work@example.com")
    code = create_email_active_code(alice, "alice.work@example.com", now=NOW)

    address = verify_active_email_code(db, code, "alice.work@example.com", now=NOW)
    assert address is not None
    assert address.uid == alice.id
    assert verify_active_email_code(db, code, "alice@example.com", now=NOW) is None


def test_email_activation_code_ignores_address_case(db, alice, email_service):
    """Test the address is matched as stored, whatever case the caller typed."""
    email_service.add_email_address(alice.id, "Alice.Work@Example.com")
    code = create_email_active_code(alice, " Alice.Work@Example.com", now=NOW)

    address = verify_active_email_code(db, code, "Alice.Work@Example.com", now=NOW)
    assert address is not None
    assert address.email == "alice.work@example.com"
    assert verify_active_email_code(db, code, "alice.work@example.com", now=NOW) is not None
