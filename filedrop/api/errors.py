"""
Error mapping.

Resolves every failure at the handler boundary into a bare status code:
400 for bad requests, 404 for missing files and routes, 500 for failures
after a request was accepted. Responses carry no error body.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from filedrop.core.exceptions import FiledropError
from filedrop.core.logging import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application."""

    @app.exception_handler(FiledropError)
    async def filedrop_error_handler(
        request: Request, exc: FiledropError
    ) -> Response:
        """Handle Filedrop errors."""
        log_method = logger.error if exc.status_code >= 500 else logger.info
        log_method(
            "request_failed",
            path=request.url.path,
            status_code=exc.status_code,
            **exc.to_dict(),
        )
        return Response(status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Handle validation errors."""
        logger.info(
            "request_invalid",
            path=request.url.path,
            errors=[error.get("msg", "") for error in exc.errors()],
        )
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Handle routing errors and errors raised by Starlette itself."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info("route_not_found", path=request.url.path)
        return Response(status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def general_error_handler(
        request: Request, exc: Exception
    ) -> Response:
        """Handle unexpected errors."""
        logger.exception("unhandled_error", path=request.url.path)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
