"""
Pytest configuration and fixtures.
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from filedrop.api.main import create_app
from filedrop.core.config import Settings
from filedrop.services.storage.base import StorageBackend
from filedrop.services.storage.factory import (
    create_storage_backend,
    reset_storage_backend,
)


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    """Directory used by the local storage backend."""
    return tmp_path / "uploads"


@pytest.fixture
def test_settings(storage_path: Path) -> Settings:
    """Create test settings."""
    return Settings(
        _env_file=None,
        app_env="development",
        app_debug=True,
        storage_backend="local",
        storage_path=str(storage_path),
        log_format="console",
    )


@pytest.fixture(autouse=True)
def clean_storage_singleton():
    """Make sure no test sees a backend cached by another one."""
    reset_storage_backend()
    yield
    reset_storage_backend()


@pytest_asyncio.fixture(params=["local", "memory"])
async def storage(request, storage_path: Path) -> StorageBackend:
    """Storage backend with its root created, for each backend type."""
    backend = create_storage_backend(request.param, base_path=storage_path)
    await backend.ensure_root()
    return backend


@pytest_asyncio.fixture
async def client(
    test_settings: Settings, storage: StorageBackend
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    app = create_app(test_settings, storage=storage)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


def build_multipart_body(
    boundary: str, parts: list[tuple[str, str | None, bytes]]
) -> bytes:
    """
    Build a multipart/form-data body by hand.

    Each part is (field name, filename or None, payload).
    """
    chunks = []
    for name, filename, payload in parts:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        chunks.append(
            f"--{boundary}\r\nContent-Disposition: {disposition}\r\n\r\n".encode()
            + payload
            + b"\r\n"
        )
    chunks.append(f"--{boundary}--\r\n".encode())
    return b"".join(chunks)


@pytest.fixture
def multipart_body():
    """Builder for hand-made multipart bodies."""
    return build_multipart_body
