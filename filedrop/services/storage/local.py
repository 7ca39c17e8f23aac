"""
Local filesystem storage backend.

Stores every file directly inside a single flat directory. The filename is
joined to the root verbatim; no sanitization happens unless strict filename
checking is enabled.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from filedrop.core.exceptions import (
    FileCreateError,
    FileReadError,
    FileWriteError,
    StorageListError,
    StoredFileNotFoundError,
)
from filedrop.core.logging import get_logger
from filedrop.services.storage.base import StorageBackend

logger = get_logger(__name__)


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage implementation."""

    def __init__(self, base_path: str | Path, strict_filenames: bool = False) -> None:
        """
        Initialize local storage backend.

        The directory is not created here; call ``ensure_root`` once at
        startup.

        Args:
            base_path: Root directory for file storage.
            strict_filenames: Reject filenames that could leave the root.
        """
        super().__init__(strict_filenames=strict_filenames)
        self.base_path = Path(base_path).resolve()

    def _get_full_path(self, filename: str) -> Path:
        """Get full filesystem path for a filename."""
        self._check_key(filename)
        return Path(f"{self.base_path}/{filename}")

    async def ensure_root(self) -> None:
        """Create the storage directory."""
        await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        logger.debug("storage_root_ready", path=str(self.base_path))

    async def write(self, filename: str, data: bytes) -> None:
        """Write file to local storage."""
        full_path = self._get_full_path(filename)

        created = False
        try:
            async with aiofiles.open(full_path, "wb") as f:
                created = True
                await f.write(data)
                await f.flush()
        except (OSError, ValueError) as e:
            if not created:
                raise FileCreateError(
                    message=f"Failed to create file: {e}",
                    details={"filename": filename},
                ) from e
            raise FileWriteError(
                message=f"Failed to write file: {e}",
                details={"filename": filename},
            ) from e

    async def read(self, filename: str) -> bytes:
        """Read file from local storage."""
        full_path = self._get_full_path(filename)

        try:
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise StoredFileNotFoundError(
                message=f"File not found: {filename}",
                details={"filename": filename},
            ) from e
        except (OSError, ValueError) as e:
            raise FileReadError(
                message=f"Failed to read file: {e}",
                details={"filename": filename},
            ) from e

    async def list_files(self) -> list[str]:
        """List entries of the storage directory."""
        try:
            names = await aiofiles.os.listdir(self.base_path)
        except OSError as e:
            raise StorageListError(
                message=f"Failed to list files: {e}",
                details={"path": str(self.base_path)},
            ) from e

        return [name for name in names if _is_utf8(name)]


def _is_utf8(name: str) -> bool:
    # os.listdir smuggles undecodable bytes through as lone surrogates
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
