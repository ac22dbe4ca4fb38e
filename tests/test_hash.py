import pytest

from utils.hash import (
    hash_password,
    is_legacy_plaintext,
    is_password_hash,
    verify_credential,
)


def test_hashed_password_verifies():
    stored = hash_password("abc123")

    assert is_password_hash(stored)
    assert verify_credential("abc123", stored).valid
    assert not verify_credential("abc123", stored).rehash_needed


def test_hashed_password_rejects_wrong_password():
    stored = hash_password("abc123")

    check = verify_credential("wrong", stored)

    assert not check.valid
    assert not check.rehash_needed


def test_plaintext_match_requests_rehash():
    check = verify_credential("abc123", "abc123")

    assert check.valid
    assert check.rehash_needed


def test_plaintext_mismatch():
    check = verify_credential("wrong", "abc123")

    assert not check.valid
    assert not check.rehash_needed


@pytest.mark.parametrize("stored", [None, "", 12345, {"hash": "x"}, b"abc123"])
def test_unusable_stored_values_never_verify(stored):
    assert verify_credential("abc123", stored).valid is False


def test_truncated_hash_is_not_treated_as_plaintext():
    stored = hash_password("abc123")[:30]

    assert not is_password_hash(stored)
    assert not is_legacy_plaintext(stored)
    assert not verify_credential(stored, stored).valid


def test_empty_submission_never_verifies():
    assert not verify_credential("", "").valid
    assert not verify_credential(None, "abc123").valid


def test_overlong_password():
    with pytest.raises(ValueError):
        hash_password("x" * 73)

    assert not verify_credential("x" * 73, hash_password("x" * 72)).valid


def test_long_legacy_plaintext_still_verifies():
    check = verify_credential("x" * 80, "x" * 80)

    assert check.valid
    assert check.rehash_needed
    assert not verify_credential("x" * 80, "x" * 79 + "y").valid


def test_hashes_are_salted():
    assert hash_password("abc123") != hash_password("abc123")
