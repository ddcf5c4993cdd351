"""Abstract interface for key-value persistence."""

from abc import ABC, abstractmethod


class IKeyValueStore(ABC):
    """
    String key to string value store.

    Implementations: SQLiteKeyValueStore, InMemoryKeyValueStore
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key was never written."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key* if present."""
        pass

    async def close(self) -> None:
        """Release resources held by the store."""
        return None
