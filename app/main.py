from contextlib import asynccontextmanager
from typing import Any
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum
from mangum.types import LambdaContext
from app.common import get_controllers
from app.common.config import AppConfig
from app.common.middlewares import AuthenticationMiddleware, register_exception_handlers
from loguru import logger

PORT = AppConfig.PORT


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server is running on http://localhost:{PORT}")
    yield
    logger.info("Server shutting down")


app = FastAPI(title="User Deletion Service", lifespan=lifespan)

# Use FastAPI's built-in origin pattern matching for CORS
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1|192\.168\.\d+\.\d+)(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AuthenticationMiddleware)
register_exception_handlers(app)

for controller in get_controllers():
    app.include_router(controller().router)


asgi_handler = Mangum(app, lifespan="off")


def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Lambda handler function"""
    headers = event.get("headers") or {}
    user_agent = headers.get("User-Agent", headers.get("user-agent", ""))

    logger_context = {
        "request_id": context.aws_request_id,
        "user_agent": user_agent,
        "x-forwarded-for": headers.get("X-Forwarded-For", ""),
        "httpMethod": event.get("httpMethod", ""),
        "path": event.get("path", ""),
    }

    with logger.contextualize(**logger_context):
        logger.info("Request received")
        response = asgi_handler(event, context)
        logger.info("Response generated", status_code=response.get("statusCode"))
        return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=AppConfig.HOST, port=PORT)
