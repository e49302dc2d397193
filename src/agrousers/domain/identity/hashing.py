"""Argon2id password hashing for the Password value object, using argon2-cffi."""
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=65536,  # 64 MiB
    parallelism=2,
    hash_len=32,
    salt_len=16,
)


def hash_password(raw_password: str) -> str:
    """Hash a raw password using Argon2id with a fresh random salt."""
    return _hasher.hash(raw_password)


def verify_password(raw_password: str, hashed: str) -> bool:
    """Verify a raw password against a stored Argon2id hash."""
    try:
        return _hasher.verify(hashed, raw_password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """True if the hash was created with parameters other than the current ones."""
    return _hasher.check_needs_rehash(hashed)
