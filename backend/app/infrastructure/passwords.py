"""Credential Hashing — pbkdf2-sha256 digests for auth_users rows.

Invariants:
    - Stored digest format: "pbkdf2_sha256$<iterations>$<hex>"; salt in its own column
    - verify_credentials reads the iteration count from the digest, so raising
      PASSWORD_HASH_ITERATIONS never locks out existing users
    - Malformed or foreign digests never verify (False, no exception)
"""

import hashlib
import secrets
from dataclasses import dataclass

ALGORITHM = "pbkdf2_sha256"


@dataclass(frozen=True)
class Credentials:
    """What an auth_users row stores for one password."""
    password_hash: str
    password_salt: str


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations,
    ).hex()


def hash_credentials(password: str, iterations: int) -> Credentials:
    """Fresh salt and digest for a new auth user."""
    if iterations < 1:
        raise ValueError("iterations must be positive")
    salt = secrets.token_hex(16)
    digest = _derive(password, salt, iterations)
    return Credentials(f"{ALGORITHM}${iterations}${digest}", salt)


def verify_credentials(password: str, credentials: Credentials) -> bool:
    algorithm, _, rest = credentials.password_hash.partition("$")
    iterations, _, expected = rest.partition("$")
    if algorithm != ALGORITHM or not iterations.isdigit() or not expected:
        return False
    actual = _derive(password, credentials.password_salt, int(iterations))
    return secrets.compare_digest(actual, expected)
