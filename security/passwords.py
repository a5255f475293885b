"""
security/passwords.py
----------------------
Salted password hashing for user registration and login.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>`` so
the iteration count can be raised later without invalidating old hashes.
"""

import hashlib
import hmac
import secrets

_ALGORITHM = "pbkdf2_sha256"
_ITERATIONS = 260_000
_SALT_BYTES = 16
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str, iterations: int = _ITERATIONS) -> str:
    """
    Hash a password with a fresh random salt.

    Args:
        password: The plaintext password.
        iterations: PBKDF2 work factor.

    Returns:
        The encoded hash string.
    """
    salt = secrets.token_bytes(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a plaintext password against an encoded hash in constant time.

    Malformed hashes never verify.
    """
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        if algorithm != _ALGORITHM:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(digest, expected)
