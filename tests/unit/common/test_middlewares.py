from unittest.mock import AsyncMock, MagicMock, patch
import uuid

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.common.exceptions import DatabaseConfigurationException, NotFoundException
from app.common.middlewares import AuthenticationMiddleware, authorize, register_exception_handlers
from app.profile.profile_controller import ProfileController
from app.user import User


def _build_app(is_admin: bool) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AuthenticationMiddleware)
    register_exception_handlers(app)

    @app.post("/guarded", dependencies=[Depends(authorize(is_admin=is_admin))])
    async def guarded(request: Request) -> dict:
        user = request.state.user
        return {"username": user.username if user else None}

    return app


@pytest.fixture
def user_service() -> AsyncMock:
    service = AsyncMock()
    with patch("app.common.config.ServiceFactory.get_user_service", new=MagicMock(return_value=service)):
        yield service


def test_anonymous_request_passes_when_admin_not_required(user_service: AsyncMock):
    client = TestClient(_build_app(is_admin=False))

    response = client.post("/guarded")

    assert response.status_code == 200
    assert response.json() == {"username": None}
    user_service.get_user_by_username.assert_not_awaited()


def test_forwarded_user_is_attached_to_request(user_service: AsyncMock):
    user_service.get_user_by_username.return_value = User(id=uuid.uuid4(), username="alice")
    client = TestClient(_build_app(is_admin=False))

    response = client.post("/guarded", headers={"X-Forwarded-User": "alice"})

    assert response.json() == {"username": "alice"}
    user_service.get_user_by_username.assert_awaited_once_with("alice")


def test_unknown_forwarded_user_continues_anonymously(user_service: AsyncMock):
    user_service.get_user_by_username.side_effect = NotFoundException()
    client = TestClient(_build_app(is_admin=False))

    response = client.post("/guarded", headers={"X-Forwarded-User": "ghost"})

    assert response.status_code == 200
    assert response.json() == {"username": None}


def test_admin_route_rejects_anonymous_caller(user_service: AsyncMock):
    client = TestClient(_build_app(is_admin=True))

    response = client.post("/guarded")

    assert response.status_code == 403
    assert response.json() == {"ok": False, "message": "Admin privileges required"}


def test_admin_route_rejects_non_admin_caller(user_service: AsyncMock):
    user_service.get_user_by_username.return_value = User(username="bob", is_admin=False)
    client = TestClient(_build_app(is_admin=True))

    response = client.post("/guarded", headers={"X-Forwarded-User": "bob"})

    assert response.status_code == 403


def test_admin_route_allows_admin_caller(user_service: AsyncMock):
    user_service.get_user_by_username.return_value = User(username="root", is_admin=True)
    client = TestClient(_build_app(is_admin=True))

    response = client.post("/guarded", headers={"X-Forwarded-User": "root"})

    assert response.status_code == 200
    assert response.json() == {"username": "root"}


def test_lookup_releases_session(user_service: AsyncMock):
    user_service.get_user_by_username.return_value = User(username="alice")
    client = TestClient(_build_app(is_admin=False))

    client.post("/guarded", headers={"X-Forwarded-User": "alice"})

    user_service.close.assert_awaited_once()


def test_store_failure_during_lookup_continues_anonymously(user_service: AsyncMock):
    user_service.get_user_by_username.side_effect = OperationalError("SELECT users", {}, Exception("connection refused"))
    app = FastAPI()
    app.add_middleware(AuthenticationMiddleware)
    app.include_router(ProfileController().router)
    client = TestClient(app)

    response = client.get("/profile", headers={"X-Forwarded-User": "alice"})

    assert response.status_code == 200
    assert 'name="other-username"' in response.text
    user_service.close.assert_awaited_once()


def test_store_setup_failure_during_lookup_continues_anonymously():
    def _unavailable_user_service():
        raise DatabaseConfigurationException("RDS_ENDPOINT must be set")

    with patch("app.common.config.ServiceFactory.get_user_service", new=_unavailable_user_service):
        client = TestClient(_build_app(is_admin=False))
        response = client.post("/guarded", headers={"X-Forwarded-User": "alice"})

    assert response.status_code == 200
    assert response.json() == {"username": None}
