"""Repository contracts for the Identity bounded context."""
from typing import Protocol

from .entities import User
from .value_objects import Email


class IUserRepository(Protocol):
    """Credential store.

    Implementations raise ``StorageError`` on any backend failure and
    ``DuplicateKey`` from :meth:`create` when the email is already taken.
    """

    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_email(self, email: Email) -> User | None: ...

    async def create(self, user: User) -> User:
        """Insert and return the user with ``id`` and ``created_at`` assigned."""
        ...

    async def update(self, user: User) -> None: ...
