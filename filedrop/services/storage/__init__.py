"""Storage service abstraction for the local filesystem and in-memory fakes."""

from filedrop.services.storage.base import StorageBackend, check_filename
from filedrop.services.storage.factory import get_storage_backend

__all__ = ["StorageBackend", "check_filename", "get_storage_backend"]
