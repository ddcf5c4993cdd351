"""Structured output of the free-text bill parser."""

from pydantic import Field

from swipelite.core.entities.base import Entity


class ParsedBillItem(Entity):
    """An item mentioned in a free-text bill."""

    name: str
    quantity: float
    price: float


class ParsedBill(Entity):
    """Customer and items extracted from a free-text billing description."""

    customer_name: str | None = None
    phone: str | None = None
    items: list[ParsedBillItem] = Field(default_factory=list)
