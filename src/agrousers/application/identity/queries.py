"""Identity use-case queries."""
from agrousers.domain.identity.entities import User
from agrousers.domain.identity.repositories import IUserRepository


async def get_user_by_id(user_id: int, user_repo: IUserRepository) -> User | None:
    return await user_repo.get_by_id(user_id)
