import uvicorn as uvicorn
from fastapi import FastAPI, Request, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from typing import Optional
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
import redis.asyncio as redis
import logging

from src.config.settings import DEFAULT_SESSION_SECRET_KEY, Settings, settings as default_settings
from src.commonUtils.email_renderer import TemplateRenderer
from src.commonUtils.notifier import Notifier, build_notifier
from src.routes import waitlistRoute

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    redis_connection = None

    # Initialize rate limiter
    if app.state.settings.RATE_LIMITING_ENABLED:
        redis_connection = redis.from_url(app.state.settings.REDIS_URL, encoding="utf-8")
        await FastAPILimiter.init(redis_connection)

    yield

    if redis_connection is not None:
        await redis_connection.aclose()


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler that formats all errors consistently"""
    error_response = {
        "error": {
            "type": exc.__class__.__name__,
            "message": "An error occurred",
            "detail": str(exc),
            "path": request.url.path,
        }
    }

    status_code = 500

    # Handle HTTP exceptions (404, 405, 429, etc.)
    if isinstance(exc, StarletteHTTPException):
        status_code = exc.status_code
        error_response["error"]["message"] = exc.detail
        error_response["error"]["detail"] = exc.detail

    # Handle validation errors
    elif isinstance(exc, RequestValidationError):
        status_code = 422
        error_response["error"]["message"] = "Validation error"
        error_response["error"]["detail"] = exc.errors()

    # Log unexpected errors
    if status_code == 500:
        logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
        error_response["error"]["message"] = "Internal server error"
        # Don't expose internal details
        error_response["error"]["detail"] = "Please contact support"

    return JSONResponse(
        status_code=status_code,
        # validation error details may carry the raw exception under "ctx"
        content=jsonable_encoder(error_response, custom_encoder={Exception: str})
    )


def create_app(app_settings: Optional[Settings] = None, notifier: Optional[Notifier] = None) -> FastAPI:
    app_settings = app_settings or default_settings

    # Configure logging
    logging.basicConfig(level=app_settings.LOG_LEVEL.upper())

    if app_settings.is_production and app_settings.SESSION_SECRET_KEY == DEFAULT_SESSION_SECRET_KEY:
        logger.warning("⚠️ SESSION_SECRET_KEY is the default value in production - session cookies can be forged")

    app = FastAPI(
        lifespan=lifespan,
        docs_url=None if app_settings.is_production else "/docs",
        redoc_url=None if app_settings.is_production else "/redoc"
    )

    # The notification collaborator is created once per process
    app.state.settings = app_settings
    app.state.renderer = TemplateRenderer(platform_name=app_settings.PLATFORM_NAME)
    app.state.notifier = notifier or build_notifier(app_settings, app.state.renderer)
    # session ids with a send in progress
    app.state.in_flight_sessions = set()

    # Register the handler for all exceptions
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, global_exception_handler)
    app.add_exception_handler(RequestValidationError, global_exception_handler)

    app.add_middleware(
        SessionMiddleware,
        secret_key=app_settings.SESSION_SECRET_KEY,
        https_only=app_settings.is_production,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    signup_dependencies = []
    if app_settings.RATE_LIMITING_ENABLED:
        signup_dependencies.append(Depends(RateLimiter(times=5, seconds=60)))

    app.include_router(waitlistRoute.router, tags=['Waitlist'], dependencies=signup_dependencies)

    @app.get("/api/healthchecker")
    def root():
        return {"message": f"Welcome to {app_settings.PLATFORM_NAME} waitlist"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("src.main:app", host="0.0.0.0", port=5001, reload=True, log_level="info")
