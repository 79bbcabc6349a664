"""Session store interfaces and implementations."""

from .sqlite_store import SqliteSessionStore
from .status_cache import MarketStatusCache
from .store import MemorySessionStore, SessionStore

__all__ = ["MarketStatusCache", "MemorySessionStore", "SessionStore", "SqliteSessionStore"]
