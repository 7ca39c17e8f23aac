"""
Request dependencies.

The storage backend and settings are attached to the application at
construction time and resolved from ``request.app.state`` per request.
"""

from typing import Annotated

from fastapi import Depends, Request

from filedrop.core.config import Settings
from filedrop.services.storage.base import StorageBackend


def get_storage(request: Request) -> StorageBackend:
    """Return the storage backend injected into the application."""
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


Storage = Annotated[StorageBackend, Depends(get_storage)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
