"""
In-memory storage backend for development and testing.
"""

from filedrop.core.exceptions import FileCreateError, StoredFileNotFoundError
from filedrop.services.storage.base import StorageBackend


class MemoryStorageBackend(StorageBackend):
    """
    Dict-backed storage mirroring a flat local root.

    The root holds no subdirectories, so a key that is empty or contains a
    path separator cannot be created, just as on a freshly created local
    root.
    """

    def __init__(self, strict_filenames: bool = False) -> None:
        super().__init__(strict_filenames=strict_filenames)
        self._files: dict[str, bytes] = {}

    async def ensure_root(self) -> None:
        """Nothing to create."""

    async def write(self, filename: str, data: bytes) -> None:
        """Store a copy of the data under the filename."""
        self._check_key(filename)
        if not filename or "/" in filename:
            raise FileCreateError(
                message="Failed to create file: no such directory",
                details={"filename": filename},
            )
        self._files[filename] = bytes(data)

    async def read(self, filename: str) -> bytes:
        """Return stored data."""
        self._check_key(filename)
        try:
            return self._files[filename]
        except KeyError as e:
            raise StoredFileNotFoundError(
                message=f"File not found: {filename}",
                details={"filename": filename},
            ) from e

    async def list_files(self) -> list[str]:
        """List stored filenames."""
        return list(self._files)
