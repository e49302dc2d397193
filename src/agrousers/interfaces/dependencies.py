"""FastAPI dependency injection: DB session, facade, and the current user."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from agrousers.config import Settings, get_settings
from agrousers.domain.identity.exceptions import Unauthenticated
from agrousers.infrastructure.auth.jwt import decode_token
from agrousers.infrastructure.database.connection import get_db_session
from agrousers.infrastructure.database.repositories.identity import UserRepository
from agrousers.interfaces.facade import UsersFacade

# ── Session ───────────────────────────────────────────────────────────────────

_bearer = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_db_session() as session:
        yield session


async def get_facade(
    session: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UsersFacade:
    return UsersFacade(user_repo=UserRepository(session), settings=settings)


# ── Auth ──────────────────────────────────────────────────────────────────────

async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    facade: Annotated[UsersFacade, Depends(get_facade)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> int:
    """Resolve the acting user from the bearer token.

    A token that fails verification raises InvalidToken. The subject must
    still exist; a token for a removed user is rejected.
    """
    if credentials is None:
        raise Unauthenticated()

    payload = decode_token(
        credentials.credentials,
        secret=settings.jwt_secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        algorithm=settings.jwt_algorithm,
    )
    try:
        user_id = int(payload["sub"])
    except (KeyError, ValueError):
        raise Unauthenticated("Invalid token.")

    if await facade.get_user(user_id) is None:
        raise Unauthenticated("User does not exist.")

    return user_id


# Type aliases for cleaner signatures
Facade = Annotated[UsersFacade, Depends(get_facade)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
