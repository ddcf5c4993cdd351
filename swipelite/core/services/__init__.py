"""Pure domain services: pricing, slots, document assembly."""

from swipelite.core.services.dashboard import DashboardStats, compute_dashboard_stats
from swipelite.core.services.document import (
    WALK_IN_PARTY,
    CustomerBlock,
    DocumentLine,
    InvoiceDocument,
    PaperSpec,
    SellerBlock,
    assemble_document,
)
from swipelite.core.services.numbering import (
    generate_invoice_number,
    generate_sku,
    new_id,
)
from swipelite.core.services.pricing import TAX_RATE, Totals, apply_totals, compute_totals
from swipelite.core.services.slots import (
    PLACEHOLDER,
    ResolvedField,
    ResolvedSlots,
    editable_fields,
    resolve_slots,
)

__all__ = [
    "TAX_RATE",
    "Totals",
    "compute_totals",
    "apply_totals",
    "PLACEHOLDER",
    "ResolvedField",
    "ResolvedSlots",
    "resolve_slots",
    "editable_fields",
    "WALK_IN_PARTY",
    "PaperSpec",
    "SellerBlock",
    "CustomerBlock",
    "DocumentLine",
    "InvoiceDocument",
    "assemble_document",
    "new_id",
    "generate_invoice_number",
    "generate_sku",
    "DashboardStats",
    "compute_dashboard_stats",
]
