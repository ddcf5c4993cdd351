"""Key-value storage implementations."""

from swipelite.config import get_settings
from swipelite.core.exceptions import ConfigurationError
from swipelite.core.interfaces.storage import IKeyValueStore
from swipelite.infrastructure.storage.memory_store import InMemoryKeyValueStore
from swipelite.infrastructure.storage.repository import CollectionRepository, StorageKey
from swipelite.infrastructure.storage.sqlite_store import SQLiteKeyValueStore


def create_store(backend: str | None = None) -> IKeyValueStore:
    """Create the key-value store selected in settings."""
    backend = backend or get_settings().storage.backend
    if backend == "sqlite":
        return SQLiteKeyValueStore()
    if backend == "memory":
        return InMemoryKeyValueStore()
    raise ConfigurationError(f"Unknown storage backend: {backend}")


__all__ = [
    "CollectionRepository",
    "StorageKey",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "create_store",
]
