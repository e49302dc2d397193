"""
Pytest configuration shared by all agrousers tests.

Provides test settings, an in-memory credential store and helpers for
building credentials with stale hash parameters.
"""

from datetime import datetime, timezone

import pytest
from argon2 import PasswordHasher

from agrousers.config import Settings
from agrousers.domain.identity.entities import User
from agrousers.domain.identity.exceptions import DuplicateKey, StorageError
from agrousers.domain.identity.value_objects import Email, Password

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "Pass@123"
TEST_SECRET = "test-jwt-secret-for-testing-only-0123456789"
TEST_ISSUER = "agrousers-tests"
TEST_AUDIENCE = "agrousers-clients"

# Deliberately weaker than the production hasher so check_needs_rehash fires.
_legacy_hasher = PasswordHasher(time_cost=1, memory_cost=8192, parallelism=1)


def _legacy_hash(plaintext: str) -> str:
    return _legacy_hasher.hash(plaintext)


class InMemoryUserRepository:
    """Dict-backed credential store honouring the repository contract."""

    def __init__(self) -> None:
        self._rows: dict[int, tuple[str, str, datetime]] = {}
        self._next_id = 1
        self.fail_updates = False
        self.update_calls = 0

    async def get_by_id(self, user_id: int) -> User | None:
        row = self._rows.get(user_id)
        return self._to_user(user_id, row) if row else None

    async def get_by_email(self, email: Email) -> User | None:
        for user_id, row in self._rows.items():
            if row[0] == str(email):
                return self._to_user(user_id, row)
        return None

    async def create(self, user: User) -> User:
        if any(row[0] == str(user.email) for row in self._rows.values()):
            raise DuplicateKey()
        user.id = self._next_id
        user.created_at = datetime.now(timezone.utc)
        self._rows[user.id] = (str(user.email), str(user.password), user.created_at)
        self._next_id += 1
        return user

    async def update(self, user: User) -> None:
        self.update_calls += 1
        if self.fail_updates:
            raise StorageError()
        email, _, created_at = self._rows[user.id]
        self._rows[user.id] = (email, str(user.password), created_at)

    def stored_hash(self, user_id: int) -> str:
        return self._rows[user_id][1]

    @staticmethod
    def _to_user(user_id: int, row: tuple[str, str, datetime]) -> User:
        email, hashed, created_at = row
        return User(
            id=user_id,
            email=Email(email),
            password=Password.from_hash(hashed),
            created_at=created_at,
        )


@pytest.fixture
def settings() -> Settings:
    """Test settings that ignore any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_issuer=TEST_ISSUER,
        jwt_audience=TEST_AUDIENCE,
    )


@pytest.fixture
def legacy_hash():
    """Hash function using outdated Argon2 parameters."""
    return _legacy_hash


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def test_user() -> User:
    """A persisted-looking credential with a current hash."""
    return User(
        id=7,
        email=Email(TEST_EMAIL),
        password=Password.create(TEST_PASSWORD),
        created_at=datetime.now(timezone.utc),
    )
