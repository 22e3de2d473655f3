from types import SimpleNamespace

import pytest

from marketplace.domain.enums import UserStatus, VerificationStatus
from marketplace.services.status_resolver import resolve_status, status_value


def _user(status):
    return SimpleNamespace(status=status)


def _store(is_verified, is_rejected):
    return SimpleNamespace(is_verified=is_verified, is_rejected=is_rejected)


@pytest.mark.parametrize(
    ("user_status", "is_verified", "is_rejected", "expected"),
    [
        (UserStatus.REJECTED, False, False, "REJECTED"),
        (UserStatus.REJECTED, True, False, "REJECTED"),
        (UserStatus.REJECTED, False, True, "REJECTED"),
        (UserStatus.REJECTED, True, True, "REJECTED"),
        (UserStatus.PENDING, False, True, "REJECTED"),
        (UserStatus.PENDING, True, True, "REJECTED"),
        (UserStatus.APPROVED, False, True, "REJECTED"),
        (UserStatus.APPROVED, True, True, "REJECTED"),
        (UserStatus.PENDING, False, False, "PENDING"),
        (UserStatus.PENDING, True, False, "PENDING"),
        (UserStatus.APPROVED, False, False, "FORM_APPROVED"),
        (UserStatus.APPROVED, True, False, "APPROVED"),
    ],
)
def test_resolution_table(user_status, is_verified, is_rejected, expected):
    result = resolve_status(_user(user_status), _store(is_verified, is_rejected))
    assert status_value(result) == expected


@pytest.mark.parametrize(
    ("user_status", "expected"),
    [
        (UserStatus.PENDING, VerificationStatus.PENDING),
        (UserStatus.APPROVED, VerificationStatus.FORM_APPROVED),
        (UserStatus.REJECTED, VerificationStatus.REJECTED),
    ],
)
def test_missing_store_counts_as_unverified(user_status, expected):
    assert resolve_status(_user(user_status), None) == expected


def test_plain_string_status_is_accepted():
    assert resolve_status(_user("approved"), _store(True, False)) == VerificationStatus.APPROVED


def test_missing_user_status_defaults_to_pending():
    assert resolve_status(_user(None), _store(False, False)) == VerificationStatus.PENDING


def test_unknown_status_falls_through_as_raw_value():
    assert resolve_status(_user("SUSPENDED"), _store(False, False)) == "SUSPENDED"


def test_resolution_does_not_touch_inputs():
    user = _user(UserStatus.APPROVED)
    store = _store(False, True)

    first = resolve_status(user, store)
    second = resolve_status(user, store)

    assert first == second == VerificationStatus.REJECTED
    assert user.status is UserStatus.APPROVED
    assert (store.is_verified, store.is_rejected) == (False, True)
