"""Concrete SQLAlchemy repository implementation for the identity context."""
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agrousers.domain.identity.entities import User
from agrousers.domain.identity.exceptions import DuplicateKey, StorageError
from agrousers.domain.identity.value_objects import Email, Password
from agrousers.infrastructure.database.models.identity import UserModel


class UserRepository:
    """Credential store over an AsyncSession. Each write commits before returning."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        try:
            result = await self._session.get(UserModel, user_id)
        except SQLAlchemyError as exc:
            raise StorageError() from exc
        return _to_user(result) if result else None

    async def get_by_email(self, email: Email) -> User | None:
        stmt = select(UserModel).where(UserModel.email == str(email))
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError() from exc
        row = result.scalar_one_or_none()
        return _to_user(row) if row else None

    async def create(self, user: User) -> User:
        model = UserModel(email=str(user.email), password_hash=str(user.password))
        self._session.add(model)
        try:
            await self._session.flush()
            await self._session.refresh(model)
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateKey() from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise StorageError() from exc
        user.id = model.id
        user.created_at = _as_utc(model.created_at)
        return user

    async def update(self, user: User) -> None:
        try:
            existing = await self._session.get(UserModel, user.id)
            if existing is None:
                raise StorageError(f"User {user.id} is not persisted")
            existing.password_hash = str(user.password)
            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise StorageError() from exc


# ── Mappers ───────────────────────────────────────────────────────────────────

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _to_user(m: UserModel) -> User:
    return User(
        id=m.id,
        email=Email(m.email),
        password=Password.from_hash(m.password_hash),
        created_at=_as_utc(m.created_at),
    )
