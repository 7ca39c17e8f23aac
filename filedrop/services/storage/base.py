"""
Abstract base class for storage backends.

A storage backend is a filename-keyed byte store. The filename supplied by
the client is the storage key; writing an existing key overwrites it.
"""

from abc import ABC, abstractmethod

from filedrop.core.exceptions import InvalidFilenameError


def check_filename(filename: str) -> str:
    """
    Reject filenames that would escape a flat storage root.

    Args:
        filename: Client-supplied storage key.

    Returns:
        The filename, unchanged.

    Raises:
        InvalidFilenameError: If the filename is empty, a dot segment, or
            contains a path separator or NUL byte.
    """
    if not filename:
        raise InvalidFilenameError(filename, "empty name")
    if filename in (".", ".."):
        raise InvalidFilenameError(filename, "parent or current directory")
    for forbidden in ("/", "\\", "\x00"):
        if forbidden in filename:
            raise InvalidFilenameError(filename, f"contains {forbidden!r}")
    return filename


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, strict_filenames: bool = False) -> None:
        self.strict_filenames = strict_filenames

    def _check_key(self, filename: str) -> str:
        """Apply strict filename checking when it is enabled."""
        if self.strict_filenames:
            return check_filename(filename)
        return filename

    @abstractmethod
    async def ensure_root(self) -> None:
        """Create the backing root location if it does not exist yet."""
        ...

    @abstractmethod
    async def write(self, filename: str, data: bytes) -> None:
        """
        Create or overwrite a file.

        The overwrite is not atomic: a concurrent reader of the same
        filename may observe truncated or partially written content.

        Args:
            filename: Storage key.
            data: Full file content, possibly empty.

        Raises:
            FileCreateError: If the destination cannot be created.
            FileWriteError: If writing or flushing fails after creation.
        """
        ...

    @abstractmethod
    async def read(self, filename: str) -> bytes:
        """
        Read the full content of a file.

        Args:
            filename: Storage key.

        Returns:
            File content as bytes.

        Raises:
            StoredFileNotFoundError: If the file doesn't exist.
            FileReadError: If reading fails for any other reason.
        """
        ...

    @abstractmethod
    async def list_files(self) -> list[str]:
        """
        List every filename currently stored.

        Returns:
            Filenames in no particular order.

        Raises:
            StorageListError: If the root cannot be enumerated.
        """
        ...
