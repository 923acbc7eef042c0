from typing import Callable, Generator
from unittest.mock import AsyncMock, patch
from fastapi import FastAPI
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.common.controller import BaseController
from app.common.entities import BaseEntity
from app.common.middlewares import register_exception_handlers
from app.user.user_repository import UserRepository
from app.user.user_services import UserService


@pytest.fixture(scope="module")
def build_app() -> Callable[[list[type[BaseController]]], FastAPI]:
    def _make_app(controllers: list[type[BaseController]]) -> FastAPI:
        """Builds a FastAPI application with the provided controller."""
        app = FastAPI()
        register_exception_handlers(app)
        for controller in controllers:
            app.include_router(controller().router)
        return app

    return _make_app


@pytest.fixture
def mock_user_service() -> Generator[AsyncMock, None, None]:
    """
    Patch ServiceFactory.get_user_service so every caller receives the same
    AsyncMock standing in for the real UserService.
    """
    fake_service = AsyncMock()

    def _fake_get_user_service():
        return fake_service

    with patch("app.common.config.ServiceFactory.get_user_service", new=_fake_get_user_service):
        yield fake_service


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """In-memory SQLite session with the users table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    BaseEntity.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def user_repository(db_session: Session) -> UserRepository:
    return UserRepository(session=db_session)


@pytest.fixture
def sqlite_user_service(user_repository: UserRepository) -> Generator[UserService, None, None]:
    """Patch ServiceFactory.get_user_service to hand out a service backed by SQLite."""
    service = UserService(user_repository)

    def _get_user_service() -> UserService:
        return service

    with patch("app.common.config.ServiceFactory.get_user_service", new=_get_user_service):
        yield service
