"""
Filedrop - Main FastAPI Application.

Minimal HTTP file-transfer service: upload, download and list files.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from filedrop.api.errors import register_exception_handlers
from filedrop.api.routers import files
from filedrop.core.config import Settings, get_settings
from filedrop.core.logging import RequestLogger, configure_logging, get_logger
from filedrop.services.storage.base import StorageBackend
from filedrop.services.storage.factory import get_storage_backend

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware logging every request and its outcome."""

    def __init__(self, app) -> None:
        super().__init__(app)
        self.request_logger = RequestLogger()

    async def dispatch(self, request: Request, call_next):
        """Log the request, then the response status and duration."""
        method = request.method
        path = request.url.path
        self.request_logger.log_request(
            method=method,
            path=path,
            client_ip=request.client.host if request.client else None,
        )

        started = time.perf_counter()
        response = await call_next(request)
        self.request_logger.log_response(
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    storage: StorageBackend = app.state.storage

    # Startup
    configure_logging(settings)
    logger.info("starting_application", env=settings.app_env)

    await storage.ensure_root()
    logger.info("storage_ready", backend=settings.storage_backend)

    yield

    # Shutdown
    logger.info("shutting_down_application")


def create_app(
    settings: Settings | None = None,
    storage: StorageBackend | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings. Uses default if None.
        storage: Storage backend used by every handler. Built from the
            settings if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()
    if storage is None:
        storage = get_storage_backend(settings)

    app = FastAPI(
        title=settings.app_name,
        description="""
# Filedrop

Minimal HTTP file-transfer service.

- `PUT|POST /upload?filename=...` stores the raw request body
- `PUT|POST /upload/mul` stores the first field of a multipart form
- `GET /download?filename=...` returns a stored file as an attachment
- `GET /list` lists stored filenames

Uploading an existing filename overwrites it.
        """,
        version=settings.app_version,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Files", "description": "Upload, download and listing"},
            {"name": "Health", "description": "Liveness probe"},
        ],
    )

    app.state.settings = settings
    app.state.storage = storage

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(files.router)

    @app.get(
        "/",
        tags=["Health"],
        response_class=Response,
        summary="Health check",
        description="Liveness probe. Always returns 200 with an empty body.",
    )
    async def health_check() -> Response:
        """Check API health."""
        return Response(status_code=200)

    return app


def main() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "filedrop.api.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        workers=settings.app_workers,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
