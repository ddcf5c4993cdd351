"""Sales invoice domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from swipelite.core.entities.base import Entity

DEFAULT_TAX_RATE = 18


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    PAID = "PAID"
    UNPAID = "UNPAID"
    OVERDUE = "OVERDUE"


class LineItem(Entity):
    """
    One product entry on an invoice.

    Name and price are snapshots taken when the product was added; editing
    the product afterwards does not touch them.
    """

    product_id: str
    name: str
    price: float
    quantity: int = 1
    tax_rate: float = DEFAULT_TAX_RATE  # stored, not used in totals
    dynamic_values: dict[str, str] = Field(default_factory=dict)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Invoice(Entity):
    """A finalized sales invoice."""

    id: str
    invoice_number: str
    date: datetime
    customer_id: str
    items: list[LineItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax_total: float = 0.0
    grand_total: float = 0.0
    status: InvoiceStatus = InvoiceStatus.UNPAID
    profile_id: str
    template_id: str | None = None
    custom_field_data: dict[str, str] = Field(default_factory=dict)
