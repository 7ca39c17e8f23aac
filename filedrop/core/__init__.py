"""Core module - Configuration, logging, and exceptions."""

from filedrop.core.config import Settings, get_settings
from filedrop.core.exceptions import (
    FiledropError,
    BadRequestError,
    NotFoundError,
    InternalError,
    StorageError,
    FileCreateError,
    FileWriteError,
    FileReadError,
    StoredFileNotFoundError,
    StorageListError,
)

__all__ = [
    "Settings",
    "get_settings",
    "FiledropError",
    "BadRequestError",
    "NotFoundError",
    "InternalError",
    "StorageError",
    "FileCreateError",
    "FileWriteError",
    "FileReadError",
    "StoredFileNotFoundError",
    "StorageListError",
]
