"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from storefront.config import get_settings
from storefront.db import DbClient, InMemoryDbClient, PostgresDbClient
from storefront.sessions import SessionStore, connect_session_store
from storefront.storage import ImageStorage, InMemoryImageStorage, LocalImageStorage

_db_client: DbClient | None = None
_session_store: SessionStore | None = None
_image_storage: ImageStorage | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so in-memory state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store:
        return _session_store

    settings = get_settings()
    redis_url = None if settings.use_in_memory_backends else settings.redis_url
    _session_store = connect_session_store(redis_url, settings.session_key_prefix)
    return _session_store


def get_image_storage() -> ImageStorage:
    global _image_storage
    if _image_storage:
        return _image_storage

    settings = get_settings()
    if settings.use_in_memory_backends:
        _image_storage = InMemoryImageStorage()
    else:
        _image_storage = LocalImageStorage(settings.uploads_dir)
    return _image_storage
