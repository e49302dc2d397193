"""UsersFacade: the single entry point to the application layer.

Routers go through this facade instead of calling application functions
directly, which keeps the API layer thin.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from agrousers.application.identity import commands as id_commands
from agrousers.application.identity import queries as id_queries
from agrousers.config import Settings
from agrousers.domain.identity.entities import User
from agrousers.domain.identity.repositories import IUserRepository

if TYPE_CHECKING:
    from agrousers.application.identity.commands import LoginResult


class UsersFacade:
    """Aggregates the identity use cases. Injected via FastAPI dependency."""

    def __init__(self, user_repo: IUserRepository, settings: Settings) -> None:
        self._user_repo = user_repo
        self._settings = settings

    async def register(self, email: str, password: str) -> User:
        return await id_commands.register_user(
            email=email, password=password, user_repo=self._user_repo,
        )

    async def login(self, email: str, password: str, now: datetime | None = None) -> "LoginResult":
        return await id_commands.login_user(
            email=email, password=password,
            user_repo=self._user_repo, settings=self._settings, now=now,
        )

    async def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        await id_commands.change_password(
            user_id=user_id,
            current_password=current_password,
            new_password=new_password,
            user_repo=self._user_repo,
        )

    async def get_user(self, user_id: int) -> User | None:
        return await id_queries.get_user_by_id(user_id, self._user_repo)
