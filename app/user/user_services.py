from loguru import logger

from app.common.exceptions import NotFoundException
from app.user import User
from app.user.user_repository import UserRepository


class UserService:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def get_user_by_username(self, username: str) -> User:
        return self.user_repository.get_user_by_username(username)

    async def delete_user_by_username(self, username: str) -> int:
        """
        Hard-delete the user keyed on an exact username match.
        Raises NotFoundException when no row matched.
        """
        deleted = self.user_repository.delete_user_by_username(username)
        if deleted == 0:
            raise NotFoundException(f"User with username '{username}' not found.")
        logger.info("Deleted user", username=username, rows=deleted)
        return deleted

    async def close(self) -> None:
        """Release the underlying database session."""
        self.user_repository.close()
