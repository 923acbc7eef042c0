import os
from sqlalchemy.orm import Session

from app.common.db_connect import SessionLocal
from app.user.user_services import UserService
from app.user.user_repository import UserRepository


# Application configuration settings
class AppConfig:
    """Global application configuration settings"""

    PORT = 4001
    HOST = os.getenv("HOST", "0.0.0.0")

    # Whether deleting a user requires the caller to be an admin.
    # Can be overridden by environment variable DELETE_REQUIRES_ADMIN
    DELETE_REQUIRES_ADMIN = os.getenv("DELETE_REQUIRES_ADMIN", "false").lower() == "true"


class SessionFactory:
    @staticmethod
    def get_session() -> Session:
        return SessionLocal()


class ServiceFactory:
    @staticmethod
    def get_user_service() -> UserService:
        return UserService(RepositoryFactory.get_user_repository())


class RepositoryFactory:
    @staticmethod
    def get_user_repository() -> UserRepository:
        return UserRepository(session=SessionFactory.get_session())
