"""Session table implementations."""

from .base import SessionStore
from .inmemory import InMemorySessionStore
from .locks import ReadWriteLock
from .redis_store import RedisSessionStore

__all__ = ["SessionStore", "InMemorySessionStore", "ReadWriteLock", "RedisSessionStore"]
