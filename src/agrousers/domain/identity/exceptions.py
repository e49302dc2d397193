"""Error taxonomy for the Identity bounded context.

Every error carries a stable ``ErrorKind`` tag so the interface layer can map
it to a transport response without inspecting the concrete class.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_FORMAT = "INVALID_FORMAT"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    PASSWORD_UNCHANGED = "PASSWORD_UNCHANGED"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    STORAGE_ERROR = "STORAGE_ERROR"


class IdentityError(Exception):
    """Base class for all identity errors."""

    kind: ErrorKind
    default_message = "Identity error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormat(IdentityError):
    kind = ErrorKind.INVALID_FORMAT
    default_message = "The email address is invalid."


class PolicyViolation(IdentityError):
    kind = ErrorKind.POLICY_VIOLATION
    default_message = (
        "Password must contain at least 8 characters, a digit, a letter, "
        "and a special character."
    )


class NotFound(IdentityError):
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found."


class Unauthorized(IdentityError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid email or password."


class InvalidCredential(IdentityError):
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "The current password is incorrect."


class PasswordUnchanged(IdentityError):
    kind = ErrorKind.PASSWORD_UNCHANGED
    default_message = "The new password must be different from the current one."


class DuplicateKey(IdentityError):
    kind = ErrorKind.DUPLICATE_KEY
    default_message = "The email address is already registered."


class Unauthenticated(IdentityError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Could not validate credentials."


class InvalidToken(IdentityError):
    kind = ErrorKind.INVALID_TOKEN
    default_message = "Invalid or expired token."


class StorageError(IdentityError):
    """Credential store failure; not classified further."""

    kind = ErrorKind.STORAGE_ERROR
    default_message = "The credential store is unavailable."
