from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from app.common.config import ServiceFactory
from app.common.exceptions import DatabaseConfigurationException, ForbiddenException, MissingUsernameException, NotFoundException


class AuthenticationMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        """
        Populates ``request.state.user`` from the 'x-forwarded-user' header.
        Callers without the header, naming an unknown user, or arriving while the
        store is unreachable continue as anonymous.
        This stage never rejects a request; rejection is left to ``authorize``.
        """
        x_username = request.headers.get("x-forwarded-user")
        user = None
        if x_username:
            user = await self._lookup(x_username)
        request.state.user = user
        response = await call_next(request)
        return response

    async def _lookup(self, username: str):
        service = None
        try:
            service = ServiceFactory.get_user_service()
            return await service.get_user_by_username(username)
        except NotFoundException:
            logger.debug("Unknown forwarded user, continuing anonymously", username=username)
        except (SQLAlchemyError, DatabaseConfigurationException):
            logger.exception("User lookup failed, continuing anonymously", username=username)
        finally:
            if service is not None:
                await service.close()
        return None


def authorize(is_admin: bool = False) -> Callable[[Request], Awaitable[None]]:
    """
    Build a route dependency that checks the caller's capabilities.

    With ``is_admin=False`` every request passes. With ``is_admin=True`` the
    authenticated user must carry the admin flag.
    """

    async def _authorize(request: Request) -> None:
        if not is_admin:
            return
        user = getattr(request.state, "user", None)
        if user is None or not user.is_admin:
            logger.warning("Rejected non-admin caller", path=request.url.path)
            raise ForbiddenException()

    return _authorize


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions raised outside handlers to the JSON envelope."""

    @app.exception_handler(ForbiddenException)
    async def _forbidden(request: Request, exc: ForbiddenException) -> JSONResponse:
        return JSONResponse(status_code=403, content={"ok": False, "message": str(exc)})

    @app.exception_handler(MissingUsernameException)
    async def _missing_username(request: Request, exc: MissingUsernameException) -> JSONResponse:
        return JSONResponse(status_code=400, content={"ok": False, "message": str(exc)})
