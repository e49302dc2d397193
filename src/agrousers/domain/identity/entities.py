"""Domain entities for the Identity bounded context."""
from dataclasses import dataclass
from datetime import datetime

from .exceptions import InvalidCredential, PasswordUnchanged
from .value_objects import Email, Password, PasswordVerificationResult


@dataclass
class User:
    """A registered credential: identity, email and password hash.

    ``id`` and ``created_at`` are assigned by the credential store on first
    persist and never changed by the domain.
    """
    email: Email
    password: Password
    id: int = 0
    created_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id != 0

    def get_password_verification_result(self, plaintext: str) -> PasswordVerificationResult:
        return self.password.verify(plaintext)

    def verify_password(self, plaintext: str) -> bool:
        return self.get_password_verification_result(plaintext) is not PasswordVerificationResult.FAILED

    def change_password(self, current_password: str, new_password: str) -> None:
        """Replace the password after proving the current one.

        The proof must verify as exactly SUCCESS; a stale hash is refused
        until a login has upgraded it.
        """
        if self.get_password_verification_result(current_password) is not PasswordVerificationResult.SUCCESS:
            raise InvalidCredential()
        if self.get_password_verification_result(new_password) is PasswordVerificationResult.SUCCESS:
            raise PasswordUnchanged()
        self.password = Password.create(new_password)

    def force_change_password(self, password: Password) -> None:
        self.password = password
