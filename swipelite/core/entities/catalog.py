"""Product and customer entities."""

from enum import Enum

from pydantic import Field

from swipelite.core.entities.base import Entity


class ProductDynamicField(Entity):
    """
    Per-product attribute copied onto line items.

    ``is_dynamic`` fields must be filled in at sale time; the others carry
    ``default_value`` onto every line item referencing the product.
    """

    label: str
    default_value: str = ""
    is_dynamic: bool = True


class Product(Entity):
    """An inventory item that can be sold."""

    id: str
    name: str
    price: float = 0.0
    sku: str = ""
    stock: int = 0  # may go negative
    category: str = "General"
    dynamic_fields: list[ProductDynamicField] = Field(default_factory=list)

    @property
    def fixed_values(self) -> dict[str, str]:
        """Values of the non-dynamic fields keyed by label."""
        return {f.label: f.default_value for f in self.dynamic_fields if not f.is_dynamic}

    @property
    def field_labels(self) -> list[str]:
        return [f.label for f in self.dynamic_fields]


class CustomerTag(str, Enum):
    """Customer classification."""

    REGULAR = "regular"
    PREMIUM = "premium"


class Customer(Entity):
    """A billed party."""

    id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    gstin: str | None = None
    tag: CustomerTag | None = None
