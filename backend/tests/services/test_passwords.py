"""Credential hashing — digest format, verification, iteration upgrades."""

import pytest

from app.infrastructure.passwords import (
    ALGORITHM, Credentials, hash_credentials, verify_credentials,
)


def test_digest_records_algorithm_and_iterations():
    credentials = hash_credentials("secret", iterations=1000)
    algorithm, iterations, digest = credentials.password_hash.split("$")
    assert algorithm == ALGORITHM
    assert iterations == "1000"
    assert len(digest) == 64
    assert len(credentials.password_hash) <= 128
    assert len(credentials.password_salt) == 32


def test_correct_password_verifies():
    credentials = hash_credentials("secret", iterations=1000)
    assert verify_credentials("secret", credentials) is True
    assert verify_credentials("Secret", credentials) is False


def test_same_password_gets_distinct_salts():
    first = hash_credentials("secret", iterations=1000)
    second = hash_credentials("secret", iterations=1000)
    assert first.password_salt != second.password_salt
    assert first.password_hash != second.password_hash


def test_older_iteration_counts_still_verify():
    old = hash_credentials("secret", iterations=500)
    new = hash_credentials("secret", iterations=2000)
    assert verify_credentials("secret", old) is True
    assert verify_credentials("secret", new) is True


@pytest.mark.parametrize("stored", ["", "deadbeef", "md5$1000$abc", "pbkdf2_sha256$many$abc", "pbkdf2_sha256$1000$"])
def test_malformed_digest_never_verifies(stored):
    assert verify_credentials("secret", Credentials(stored, "salt")) is False


def test_iterations_must_be_positive():
    with pytest.raises(ValueError):
        hash_credentials("secret", iterations=0)
