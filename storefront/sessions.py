"""
Session store abstraction for login sessions.

Supports an in-memory fallback for tests/local runs and a Redis-backed
implementation for production.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol

import redis
from redis import exceptions as redis_exceptions

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Minimal key/value interface keyed by session id."""

    def get(self, session_id: str) -> Optional[dict]:
        ...

    def set(self, session_id: str, data: dict, ttl_seconds: int) -> None:
        ...

    def delete(self, session_id: str) -> None:
        ...


@dataclass
class InMemorySessionStore:
    """Process-local store with per-entry expiry."""

    entries: dict[str, tuple[float, dict]] = field(default_factory=dict)

    def get(self, session_id: str) -> Optional[dict]:
        entry = self.entries.get(session_id)
        if entry is None:
            return None
        expires_at, data = entry
        if expires_at <= time.time():
            del self.entries[session_id]
            return None
        return dict(data)

    def set(self, session_id: str, data: dict, ttl_seconds: int) -> None:
        now = time.time()
        expired = [key for key, (expires_at, _) in self.entries.items() if expires_at <= now]
        for key in expired:
            del self.entries[key]
        self.entries[session_id] = (now + ttl_seconds, dict(data))

    def delete(self, session_id: str) -> None:
        self.entries.pop(session_id, None)


@dataclass
class RedisSessionStore:
    """Redis-backed store; each session is a JSON string under a prefixed key."""

    url: str
    key_prefix: str = "storefront:sess:"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    def ping(self) -> None:
        self.client.ping()

    def get(self, session_id: str) -> Optional[dict]:
        try:
            raw = self.client.get(self._key(session_id))
        except redis_exceptions.ConnectionError:
            # Managed Redis drops idle connections; reconnect and treat as logged out.
            logger.warning("Redis connection lost while reading session; reconnecting")
            self.client = redis.Redis.from_url(self.url)
            return None
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, session_id: str, data: dict, ttl_seconds: int) -> None:
        self.client.setex(self._key(session_id), ttl_seconds, json.dumps(data))

    def delete(self, session_id: str) -> None:
        self.client.delete(self._key(session_id))


def connect_session_store(redis_url: Optional[str], key_prefix: str) -> SessionStore:
    """
    Return a Redis store when one is configured and reachable, otherwise an
    in-memory store.
    """
    if not redis_url:
        logger.info("[redis] disabled; using in-memory session store")
        return InMemorySessionStore()
    store = RedisSessionStore(url=redis_url, key_prefix=key_prefix)
    try:
        store.ping()
    except redis_exceptions.RedisError as exc:
        logger.warning("[redis] connect failed, using in-memory session store instead: %s", exc)
        return InMemorySessionStore()
    logger.info("[redis] enabled")
    return store
