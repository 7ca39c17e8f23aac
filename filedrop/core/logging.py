"""
Structured logging configuration using structlog.

Provides consistent JSON logging for production and pretty console output for development.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from filedrop.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        settings: Application settings. If None, uses default settings.
    """
    if settings is None:
        settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.DEBUG)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Request logging is done by RequestLogger
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name. If None, uses the caller's module name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


class RequestLogger:
    """Logger for HTTP request/response logging."""

    def __init__(self) -> None:
        self.logger = get_logger("http")

    def log_request(
        self,
        method: str,
        path: str,
        client_ip: str | None = None,
    ) -> None:
        """Log incoming HTTP request."""
        self.logger.info(
            "request_received",
            method=method,
            path=path,
            client_ip=client_ip,
        )

    def log_response(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
    ) -> None:
        """Log HTTP response."""
        log_method = self.logger.info if status_code < 400 else self.logger.warning
        log_method(
            "request_completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )


class TransferLogger:
    """Logger for file uploads, downloads and listings."""

    def __init__(self) -> None:
        self.logger = get_logger("transfers")

    def log_upload(
        self,
        filename: str,
        size: int,
        field_name: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """Log a received upload before it is stored."""
        self.logger.info(
            "upload_received",
            filename=filename,
            size=size,
            field_name=field_name,
            content_type=content_type,
        )

    def log_download(self, filename: str, size: int) -> None:
        """Log a served download."""
        self.logger.info("download_served", filename=filename, size=size)

    def log_listing(self, count: int) -> None:
        """Log a listing result."""
        self.logger.debug("listing_served", count=count)

    def log_listing_failed(self, error: str) -> None:
        """Log a listing failure that is reported as an empty result."""
        self.logger.warning("listing_failed", error=error)
