"""
Storage backend factory.

Creates the appropriate storage backend based on configuration.
"""

from filedrop.core.config import Settings, get_settings
from filedrop.services.storage.base import StorageBackend
from filedrop.services.storage.local import LocalStorageBackend
from filedrop.services.storage.memory import MemoryStorageBackend

# Singleton instance
_storage_backend: StorageBackend | None = None


def get_storage_backend(settings: Settings | None = None) -> StorageBackend:
    """
    Get the configured storage backend.

    Factory function that creates the appropriate storage backend
    based on application settings. Uses singleton pattern for caching.

    Args:
        settings: Application settings. Uses default if None.

    Returns:
        Configured StorageBackend instance.

    Raises:
        ValueError: If storage backend type is invalid.
    """
    global _storage_backend

    if _storage_backend is not None:
        return _storage_backend

    if settings is None:
        settings = get_settings()

    _storage_backend = create_storage_backend(
        settings.storage_backend,
        base_path=settings.storage_path,
        strict_filenames=settings.strict_filenames,
    )
    return _storage_backend


def reset_storage_backend() -> None:
    """Reset the storage backend singleton (for testing)."""
    global _storage_backend
    _storage_backend = None


def create_storage_backend(
    backend_type: str,
    **kwargs: object,
) -> StorageBackend:
    """
    Create a storage backend with custom configuration.

    Args:
        backend_type: Type of backend ("local" or "memory").
        **kwargs: Backend-specific configuration.

    Returns:
        Configured StorageBackend instance.
    """
    strict_filenames = bool(kwargs.get("strict_filenames", False))

    if backend_type == "local":
        base_path = kwargs.get("base_path", "uploads")
        return LocalStorageBackend(
            base_path=str(base_path),
            strict_filenames=strict_filenames,
        )

    elif backend_type == "memory":
        return MemoryStorageBackend(strict_filenames=strict_filenames)

    else:
        raise ValueError(f"Unknown storage backend: {backend_type}")
