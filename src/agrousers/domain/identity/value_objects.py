"""Immutable value objects for the Identity bounded context."""
from dataclasses import dataclass
from enum import Enum
import re

from agrousers.domain.identity.exceptions import InvalidFormat, PolicyViolation
from agrousers.domain.identity.hashing import hash_password, needs_rehash, verify_password

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9\-]{2,}(\.[a-zA-Z0-9\-]+)*\.[a-zA-Z]{2,}$"
)

PASSWORD_MIN_LENGTH = 8
_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[^A-Za-z0-9\s]")


class PasswordVerificationResult(str, Enum):
    FAILED = "failed"
    SUCCESS = "success"
    SUCCESS_REHASH_NEEDED = "success_rehash_needed"


@dataclass(frozen=True)
class Email:
    address: str

    def __post_init__(self) -> None:
        if not self.is_valid_email(self.address):
            raise InvalidFormat()
        object.__setattr__(self, "address", self.address.strip())

    @staticmethod
    def is_valid_email(raw: str | None) -> bool:
        if raw is None or not raw.strip():
            return False
        return _EMAIL_PATTERN.match(raw.strip()) is not None

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class Password:
    """Opaque wrapper for the hashed password string, never the raw password.

    Build from plaintext with :meth:`create` (policy enforced) or restore a
    stored hash with :meth:`from_hash` (trusted, no policy check).
    """
    hashed: str

    def __repr__(self) -> str:
        return "Password(hashed='***')"

    @classmethod
    def create(cls, plaintext: str | None) -> "Password":
        """Validate the complexity policy and hash with a fresh salt."""
        if not _satisfies_policy(plaintext):
            raise PolicyViolation()
        return cls(hash_password(plaintext))

    @classmethod
    def from_hash(cls, hashed: str) -> "Password":
        return cls(hashed)

    @classmethod
    def rehash(cls, plaintext: str) -> "Password":
        """Hash an already-verified plaintext with the current parameters.

        Skips the policy so that credentials registered under an older,
        looser policy can still be upgraded on login.
        """
        return cls(hash_password(plaintext))

    def verify(self, plaintext: str | None) -> PasswordVerificationResult:
        if plaintext is None or not verify_password(plaintext, self.hashed):
            return PasswordVerificationResult.FAILED
        if needs_rehash(self.hashed):
            return PasswordVerificationResult.SUCCESS_REHASH_NEEDED
        return PasswordVerificationResult.SUCCESS

    def __str__(self) -> str:
        return self.hashed


def _satisfies_policy(plaintext: str | None) -> bool:
    if plaintext is None or not plaintext.strip():
        return False
    return (
        len(plaintext) >= PASSWORD_MIN_LENGTH
        and _LETTER.search(plaintext) is not None
        and _DIGIT.search(plaintext) is not None
        and _SPECIAL.search(plaintext) is not None
    )
