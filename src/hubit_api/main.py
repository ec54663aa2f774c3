"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from hubit_api import __version__
from hubit_api.core.config import get_settings
from hubit_api.core.database import dispose_engine, init_engine
from hubit_api.core.exceptions import AuthenticationError, HubitError, PersistenceError, ValidationError
from hubit_api.core.logging import setup_logging
from hubit_api.schemas.common import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine on startup, dispose on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)
    init_engine(settings.database_url, echo=False, schema=settings.database_schema)

    yield

    await dispose_engine()


async def hubit_error_handler(request: Request, exc: HubitError) -> JSONResponse:
    """Render a domain error as ``{"detail": ..., "code": ...}``."""
    if isinstance(exc, PersistenceError):
        logger.opt(exception=exc.__cause__).error(f"{request.method} {request.url.path}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    body = ErrorResponse(detail=exc.message, code=exc.kind)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures in the same ``{detail, code}`` shape."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    body = ErrorResponse(detail="; ".join(messages), code=ValidationError.kind)
    return JSONResponse(status_code=ValidationError.status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handlers to ``app``."""
    app.add_exception_handler(HubitError, hubit_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Hubit API",
        description="Property and services marketplace: accounts, properties, and community codes",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Register middleware and routers
    from hubit_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
