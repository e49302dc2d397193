"""Identity use-case commands: register, login, change password."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from agrousers.config import Settings
from agrousers.domain.identity.entities import User
from agrousers.domain.identity.exceptions import DuplicateKey, NotFound, StorageError, Unauthorized
from agrousers.domain.identity.repositories import IUserRepository
from agrousers.domain.identity.value_objects import Email, Password, PasswordVerificationResult
from agrousers.infrastructure.auth.jwt import issue_token

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    token: str
    expires_at: datetime


async def register_user(
    *,
    email: str,
    password: str,
    user_repo: IUserRepository,
) -> User:
    """Register a new credential. The store's unique constraint has the final say on duplicates."""
    address = Email(email)
    await ensure_email_is_unique(address, user_repo)

    user = User(email=address, password=Password.create(password))
    user = await user_repo.create(user)
    logger.info("Registered user id=%s", user.id)
    return user


async def ensure_email_is_unique(email: Email, user_repo: IUserRepository) -> None:
    if await user_repo.get_by_email(email) is not None:
        raise DuplicateKey()


async def login_user(
    *,
    email: str,
    password: str,
    user_repo: IUserRepository,
    settings: Settings,
    now: datetime | None = None,
) -> LoginResult:
    """Authenticate and return a signed access token."""
    user = await _get_validated_user(email, password, user_repo)

    claims = {"sub": str(user.id), "email": str(user.email)}
    issued = issue_token(
        claims,
        secret=settings.jwt_secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        now=now,
        lifetime=timedelta(minutes=settings.jwt_access_token_expire_minutes),
        algorithm=settings.jwt_algorithm,
    )
    logger.info("User id=%s logged in", user.id)
    return LoginResult(user=user, token=issued.token, expires_at=issued.expires_at)


async def change_password(
    *,
    user_id: int,
    current_password: str,
    new_password: str,
    user_repo: IUserRepository,
) -> None:
    """Change the acting user's own password."""
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise NotFound()

    user.change_password(current_password, new_password)
    await user_repo.update(user)
    logger.info("Password changed for user id=%s", user.id)


async def _get_validated_user(email: str, password: str, user_repo: IUserRepository) -> User:
    user = await user_repo.get_by_email(Email(email))
    if user is None:
        raise NotFound()

    result = user.get_password_verification_result(password)
    if result is PasswordVerificationResult.FAILED:
        raise Unauthorized()

    if result is PasswordVerificationResult.SUCCESS_REHASH_NEEDED:
        await _rehash_password(user, password, user_repo)
    return user


async def _rehash_password(user: User, password: str, user_repo: IUserRepository) -> None:
    user.force_change_password(Password.rehash(password))
    try:
        await user_repo.update(user)
    except StorageError:
        # Rehash write failures never fail the login.
        logger.warning("Could not persist rehashed password for user id=%s", user.id, exc_info=True)
        return
    logger.info("Rehashed password for user id=%s", user.id)
