"""
Entity collection persistence over a key-value store.

Each collection lives under its own namespaced key as a JSON document.
Unreadable values fall back to the collection's seed instead of failing.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from swipelite.config import get_logger
from swipelite.core.entities import (
    BusinessProfile,
    Customer,
    Invoice,
    InvoiceTemplate,
    Product,
)
from swipelite.core.entities import defaults
from swipelite.core.interfaces.storage import IKeyValueStore

logger = get_logger(__name__)


class StorageKey(str, Enum):
    """Namespaced keys, one per entity collection."""

    INVOICES = "swipelite_invoices"
    PROFILES = "swipelite_profiles"
    ACTIVE_PROFILE_ID = "swipelite_active_profile_id"
    PRODUCTS = "swipelite_products"
    CUSTOMERS = "swipelite_customers"
    TEMPLATES = "swipelite_templates"


@dataclass(frozen=True)
class _Collection:
    adapter: TypeAdapter | None  # None for raw string values
    seed: Callable[[], Any]


_COLLECTIONS: dict[StorageKey, _Collection] = {
    StorageKey.INVOICES: _Collection(TypeAdapter(list[Invoice]), list),
    StorageKey.PROFILES: _Collection(TypeAdapter(list[BusinessProfile]), defaults.seed_profiles),
    StorageKey.ACTIVE_PROFILE_ID: _Collection(None, lambda: defaults.seed_profiles()[0].id),
    StorageKey.PRODUCTS: _Collection(TypeAdapter(list[Product]), defaults.seed_products),
    StorageKey.CUSTOMERS: _Collection(TypeAdapter(list[Customer]), defaults.seed_customers),
    StorageKey.TEMPLATES: _Collection(TypeAdapter(list[InvoiceTemplate]), defaults.seed_templates),
}


class CollectionRepository:
    """Loads and saves entity collections by key."""

    def __init__(self, store: IKeyValueStore):
        self._store = store

    @property
    def store(self) -> IKeyValueStore:
        return self._store

    @staticmethod
    def seed(key: StorageKey) -> Any:
        """Documented default for *key*."""
        return _COLLECTIONS[key].seed()

    async def load(self, key: StorageKey) -> Any:
        """
        Load the collection stored under *key*.

        Returns the seed value when nothing is stored, or when the stored
        value is not valid JSON for the collection's type.
        """
        collection = _COLLECTIONS[key]
        raw = await self._store.get(key.value)

        if raw is None or (collection.adapter is None and not raw.strip()):
            logger.debug("kv_load_seeded", key=key.value)
            return collection.seed()

        if collection.adapter is None:
            return raw

        try:
            return collection.adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(
                "kv_load_corrupt",
                key=key.value,
                errors=e.error_count(),
                preview=raw[:80],
            )
            return collection.seed()

    async def save(self, key: StorageKey, value: Any) -> None:
        """Serialize *value* and write it under *key*."""
        collection = _COLLECTIONS[key]
        if collection.adapter is None:
            raw = str(value)
        else:
            raw = collection.adapter.dump_json(value, by_alias=True).decode("utf-8")
        await self._store.set(key.value, raw)
        logger.debug("kv_saved", key=key.value, size=len(raw))
