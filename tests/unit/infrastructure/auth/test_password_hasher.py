"""Unit tests for password hashing."""

from fleetgrid.infrastructure.auth import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)


def test_hash_and_verify():
    hashed = hash_password("SecureP@ss123!")
    assert hashed.startswith("$argon2id$")
    assert verify_password("SecureP@ss123!", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_malformed_hash_does_not_verify():
    assert verify_password("anything", "not-a-hash") is False


def test_fresh_hash_needs_no_rehash():
    assert needs_rehash(hash_password("pw")) is False


def test_dummy_hash_is_stable_and_never_matches_user_input():
    assert dummy_password_hash() == dummy_password_hash()
    assert verify_password("Password123!", dummy_password_hash()) is False
