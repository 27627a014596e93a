import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.api_v1.api import api_router
from api.api_v1.middleware import register_middleware
from core.config import Settings, settings
from core.exceptions import BadRequestError, InternalError, NotFoundError, PortalError
from core.rate_limiter import InMemoryRateLimitStore, RateLimiter
from log import setup_logging_to_console, setup_logging_to_file

logger = logging.getLogger(__name__)


async def portal_error_handler(request: Request, exc: PortalError):
    logger.info(
        "%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.error
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "Database error on %s %s: %s", request.method, request.url.path, exc,
        exc_info=True,
    )
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
    error = BadRequestError(message=f"Invalid fields: {fields}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown routes and known routes hit with the wrong method look the same
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        error = NotFoundError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    app_settings: Optional[Settings] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    app_settings = app_settings or settings

    setup_logging_to_console(level=app_settings.LOG_LEVEL)
    if app_settings.LOG_DIR:
        setup_logging_to_file(
            "a11_fund_api", level=app_settings.LOG_LEVEL, log_dir=app_settings.LOG_DIR
        )

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        openapi_url=None if app_settings.is_production else "/openapi.json",
        docs_url=None if app_settings.is_production else "/docs",
        redoc_url=None,
    )
    app.state.rate_limiter = rate_limiter or RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=app_settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
        cleanup_probability=app_settings.RATE_LIMIT_CLEANUP_PROBABILITY,
    )

    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    register_middleware(
        app,
        health_path=f"{app_settings.API_PREFIX}/health",
        allowed_origins=app_settings.cors_origins,
    )
    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    logger.info(
        "%s started in %s", app_settings.PROJECT_NAME, app_settings.ENVIRONMENT_NAME
    )
    return app


app = create_app()
