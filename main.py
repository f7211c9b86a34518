"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config.settings import settings
from app.core.dependencies import DependencyContainer
from app.core.exceptions.exceptions import BaseCustomException
from app.core.logging import get_logger
from app.core.responses import ResponseHelper
from app.core.startup import AppStartupService
from app.interfaces.api.api import api_router

logger = get_logger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten request validation errors into a single line of text."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}")
    return "Invalid request: " + "; ".join(parts)


class ExceptionLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs unhandled exceptions and answers with a generic 500."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception occurred: {str(exc)} | "
                f"Type: {type(exc).__name__} | "
                f"URL: {request.url} | "
                f"Method: {request.method}",
                exc_info=True,
            )

            return PlainTextResponse("Internal Server Error", status_code=500)


def create_application(
    container: Optional[DependencyContainer] = None,
    startup_service: Optional[AppStartupService] = None,
) -> FastAPI:
    """Create FastAPI application with all configurations.

    Args:
        container: Dependency container; a MongoDB-backed one when omitted
        startup_service: Lifespan startup service; MongoDB and indexes when omitted
    """
    startup_service = startup_service or AppStartupService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting FastAPI application...")
        await startup_service.initialize_application()
        yield
        logger.info("Shutting down FastAPI application...")
        await startup_service.shutdown_application()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        root_path=settings.app_root_path,
    )
    application.state.container = container or DependencyContainer()

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as plain text."""
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Malformed path, query or body values are bad requests."""
        message = format_validation_errors(exc)
        logger.warning(
            "Request validation failed",
            extra={"url": str(request.url), "method": request.method},
        )
        return PlainTextResponse(message, status_code=400)

    @application.exception_handler(BaseCustomException)
    async def custom_exception_handler(request: Request, exc: BaseCustomException):
        """Render domain errors that escaped a route as plain text."""
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    # Add exception logging middleware FIRST to catch all exceptions
    application.add_middleware(ExceptionLoggingMiddleware)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router)

    @application.get("/")
    async def root():
        """Root endpoint."""
        return ResponseHelper.success(
            data={
                "app_name": settings.app_name,
                "version": settings.app_version,
                "docs_url": "/docs",
            },
            msg=f"Welcome to {settings.app_name}",
        )

    @application.get("/health")
    async def health_check():
        """Health check endpoint."""
        return ResponseHelper.success(
            data={
                "status": "healthy",
                "app_name": settings.app_name,
                "version": settings.app_version,
            },
            msg="Application is healthy",
        )

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
