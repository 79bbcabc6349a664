"""Session storage contract used by the status cache."""

from __future__ import annotations

from typing import Protocol


class SessionStore(Protocol):
    """String key/value persistence with session lifetime."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value or None."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def close(self) -> None:
        """Close persistence resources."""


class MemorySessionStore:
    """Process-scoped store; entries vanish with the process."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def close(self) -> None:
        return None
