"""Core domain entities."""

from swipelite.core.entities.base import Entity
from swipelite.core.entities.catalog import (
    Customer,
    CustomerTag,
    Product,
    ProductDynamicField,
)
from swipelite.core.entities.invoice import (
    DEFAULT_TAX_RATE,
    Invoice,
    InvoiceStatus,
    LineItem,
)
from swipelite.core.entities.parsed_bill import ParsedBill, ParsedBillItem
from swipelite.core.entities.profile import BusinessProfile
from swipelite.core.entities.template import (
    BUILTIN_TEMPLATE_ID,
    BaseStyle,
    CustomField,
    FieldPosition,
    InvoiceTemplate,
    PaperFormat,
)

__all__ = [
    "Entity",
    # Catalog
    "Customer",
    "CustomerTag",
    "Product",
    "ProductDynamicField",
    # Profile
    "BusinessProfile",
    # Template
    "BUILTIN_TEMPLATE_ID",
    "BaseStyle",
    "CustomField",
    "FieldPosition",
    "InvoiceTemplate",
    "PaperFormat",
    # Invoice
    "DEFAULT_TAX_RATE",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    # AI parsing
    "ParsedBill",
    "ParsedBillItem",
]
