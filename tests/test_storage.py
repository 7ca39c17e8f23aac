"""
Storage backend tests.
"""

from pathlib import Path

import pytest

from filedrop.core.config import Settings
from filedrop.core.exceptions import (
    FileCreateError,
    FileReadError,
    InvalidFilenameError,
    StorageListError,
    StoredFileNotFoundError,
)
from filedrop.services.storage.base import StorageBackend, check_filename
from filedrop.services.storage.factory import (
    create_storage_backend,
    get_storage_backend,
    reset_storage_backend,
)
from filedrop.services.storage.local import LocalStorageBackend
from filedrop.services.storage.memory import MemoryStorageBackend


# =============================================================================
# Shared Semantics
# =============================================================================


@pytest.mark.asyncio
async def test_write_then_read(storage: StorageBackend):
    await storage.write("data.bin", b"\x00\x01\x02")
    assert await storage.read("data.bin") == b"\x00\x01\x02"


@pytest.mark.asyncio
async def test_overwrite_replaces_longer_content(storage: StorageBackend):
    """A shorter payload fully replaces a longer one."""
    await storage.write("f.txt", b"a much longer first payload")
    await storage.write("f.txt", b"short")
    assert await storage.read("f.txt") == b"short"


@pytest.mark.asyncio
async def test_read_missing_raises_not_found(storage: StorageBackend):
    with pytest.raises(StoredFileNotFoundError):
        await storage.read("missing.txt")


@pytest.mark.asyncio
async def test_list_files(storage: StorageBackend):
    assert await storage.list_files() == []

    await storage.write("a.txt", b"a")
    await storage.write("b.txt", b"b")
    await storage.write("a.txt", b"again")

    assert sorted(await storage.list_files()) == ["a.txt", "b.txt"]


@pytest.mark.asyncio
async def test_write_empty_filename_fails_to_create(storage: StorageBackend):
    with pytest.raises(FileCreateError) as exc_info:
        await storage.write("", b"x")
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_write_into_missing_subdirectory_fails_to_create(storage: StorageBackend):
    """A fresh root has no subdirectories on either backend."""
    with pytest.raises(FileCreateError):
        await storage.write("sub/x.txt", b"x")
    with pytest.raises(StoredFileNotFoundError):
        await storage.read("sub/x.txt")
    assert await storage.list_files() == []


@pytest.mark.asyncio
async def test_ensure_root_is_idempotent(storage: StorageBackend):
    await storage.write("keep.txt", b"x")
    await storage.ensure_root()
    assert await storage.read("keep.txt") == b"x"


# =============================================================================
# Local Backend
# =============================================================================


@pytest.mark.asyncio
async def test_local_writes_into_root(storage_path: Path):
    storage = LocalStorageBackend(storage_path)
    await storage.ensure_root()

    await storage.write("report.pdf", b"%PDF")

    assert (storage_path / "report.pdf").read_bytes() == b"%PDF"


@pytest.mark.asyncio
async def test_local_lists_files_added_outside_the_service(storage_path: Path):
    """Listing reflects whatever the directory holds at call time."""
    storage = LocalStorageBackend(storage_path)
    await storage.ensure_root()
    (storage_path / "dropped-in.txt").write_bytes(b"x")

    assert await storage.list_files() == ["dropped-in.txt"]


@pytest.mark.asyncio
async def test_local_missing_root(tmp_path: Path):
    """Without ensure_root nothing can be created or listed."""
    storage = LocalStorageBackend(tmp_path / "absent")

    with pytest.raises(FileCreateError):
        await storage.write("x.txt", b"x")
    with pytest.raises(StorageListError):
        await storage.list_files()
    with pytest.raises(StoredFileNotFoundError):
        await storage.read("x.txt")


@pytest.mark.asyncio
async def test_local_uses_filename_verbatim(storage_path: Path):
    """Separators are not sanitized: a missing subdirectory fails creation."""
    storage = LocalStorageBackend(storage_path)
    await storage.ensure_root()

    with pytest.raises(FileCreateError):
        await storage.write("sub/x.txt", b"x")

    (storage_path / "sub").mkdir()
    await storage.write("sub/x.txt", b"x")
    assert (storage_path / "sub" / "x.txt").read_bytes() == b"x"


@pytest.mark.asyncio
async def test_local_read_directory_is_read_error(storage_path: Path):
    storage = LocalStorageBackend(storage_path)
    await storage.ensure_root()
    (storage_path / "folder").mkdir()

    with pytest.raises(FileReadError) as exc_info:
        await storage.read("folder")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_local_strict_filenames(storage_path: Path):
    storage = LocalStorageBackend(storage_path, strict_filenames=True)
    await storage.ensure_root()

    with pytest.raises(InvalidFilenameError):
        await storage.write("../outside.txt", b"x")
    with pytest.raises(InvalidFilenameError):
        await storage.read("../outside.txt")

    await storage.write("inside.txt", b"x")
    assert await storage.read("inside.txt") == b"x"


# =============================================================================
# Memory Backend
# =============================================================================


@pytest.mark.asyncio
async def test_memory_stores_a_copy():
    storage = MemoryStorageBackend()
    data = bytearray(b"mutable")

    await storage.write("m.bin", data)
    data[0:1] = b"M"

    assert await storage.read("m.bin") == b"mutable"


@pytest.mark.asyncio
async def test_memory_strict_filenames():
    storage = MemoryStorageBackend(strict_filenames=True)
    with pytest.raises(InvalidFilenameError):
        await storage.write("a/b", b"x")


# =============================================================================
# Filename Checking
# =============================================================================


@pytest.mark.parametrize("filename", ["", ".", "..", "a/b", "..\\x", "nul\x00byte"])
def test_check_filename_rejects(filename: str):
    with pytest.raises(InvalidFilenameError) as exc_info:
        check_filename(filename)
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("filename", ["a.txt", "..hidden", "with space.txt", "é.txt"])
def test_check_filename_accepts(filename: str):
    assert check_filename(filename) == filename


# =============================================================================
# Factory
# =============================================================================


def test_create_storage_backend(tmp_path: Path):
    local = create_storage_backend("local", base_path=tmp_path)
    assert isinstance(local, LocalStorageBackend)
    assert local.base_path == tmp_path.resolve()

    memory = create_storage_backend("memory", strict_filenames=True)
    assert isinstance(memory, MemoryStorageBackend)
    assert memory.strict_filenames is True

    with pytest.raises(ValueError):
        create_storage_backend("s3")


def test_get_storage_backend_is_cached(tmp_path: Path):
    settings = Settings(
        _env_file=None, storage_backend="local", storage_path=str(tmp_path)
    )

    first = get_storage_backend(settings)
    assert get_storage_backend(settings) is first

    reset_storage_backend()
    assert get_storage_backend(settings) is not first
