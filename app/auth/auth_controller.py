from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth.auth_models import DeleteUserResponse, UserDeleteRequest
from app.common.config import AppConfig, ServiceFactory
from app.common.controller import BaseController
from app.common.exceptions import MissingUsernameException, NotFoundException
from app.common.middlewares import authorize
from app.user.user_services import UserService

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_delete_request(request: Request) -> UserDeleteRequest:
    """
    Pull ``username`` out of a JSON or form encoded body.
    Anything that does not yield a non-empty string raises MissingUsernameException.
    """
    content_type = request.headers.get("content-type", "").lower()
    payload: object = {}
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            payload = {}
    elif content_type.startswith(FORM_CONTENT_TYPES):
        try:
            payload = dict(await request.form())
        except StarletteHTTPException:
            payload = {}

    username = payload.get("username") if isinstance(payload, dict) else None
    if not isinstance(username, str) or not username:
        raise MissingUsernameException()
    return UserDeleteRequest(username=username)


class AuthController(BaseController):
    prefix = "auth"
    base_path = ""

    @property
    def router(self) -> APIRouter:
        @self.api_router.post(
            "/delete/user",
            response_model=DeleteUserResponse,
            response_model_exclude_none=True,
            dependencies=[Depends(authorize(is_admin=AppConfig.DELETE_REQUIRES_ADMIN))],
            responses={
                200: {"description": "User deleted successfully"},
                400: {"model": DeleteUserResponse, "description": "Username is required"},
                403: {"model": DeleteUserResponse, "description": "Admin privileges required"},
                404: {"model": DeleteUserResponse, "description": "User not found"},
                500: {"model": DeleteUserResponse, "description": "Failed to delete user"},
            },
        )
        async def delete_user_by_username(
            payload: UserDeleteRequest = Depends(read_delete_request),
        ) -> DeleteUserResponse | JSONResponse:
            """Delete the user whose username matches the request body exactly."""
            user_service: UserService | None = None
            try:
                user_service = ServiceFactory.get_user_service()
                await user_service.delete_user_by_username(payload.username)
            except NotFoundException:
                logger.warning("Delete requested for unknown user", username=payload.username)
                body = DeleteUserResponse(ok=False, message="User not found")
                return JSONResponse(status_code=404, content=body.model_dump(exclude_none=True))
            except Exception as e:
                logger.exception("Failed to delete user", username=payload.username)
                body = DeleteUserResponse(ok=False, message="Failed to delete user", error=str(e) or type(e).__name__)
                return JSONResponse(status_code=500, content=body.model_dump())
            finally:
                if user_service is not None:
                    await user_service.close()

            return DeleteUserResponse(ok=True, message="User deleted successfully")

        return self.api_router
