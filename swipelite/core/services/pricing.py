"""
Invoice pricing.

A single flat tax rate applies to the whole subtotal. The per-item
``tax_rate`` stored on line items is not consulted.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from swipelite.core.entities.invoice import Invoice, LineItem

TAX_RATE = 0.18


@dataclass(frozen=True)
class Totals:
    """Computed invoice totals."""

    subtotal: float = 0.0
    tax_total: float = 0.0
    grand_total: float = 0.0


def compute_totals(items: Iterable[LineItem]) -> Totals:
    """
    Price a list of line items.

    Negative prices or quantities are not rejected; they flow through the
    arithmetic unchanged.
    """
    subtotal = sum((item.price * item.quantity for item in items), 0.0)
    tax_total = round(subtotal * TAX_RATE, 2)
    return Totals(
        subtotal=subtotal,
        tax_total=tax_total,
        grand_total=subtotal + tax_total,
    )


def apply_totals(invoice: Invoice) -> Invoice:
    """Return a copy of *invoice* with totals recomputed from its items."""
    totals = compute_totals(invoice.items)
    return invoice.model_copy(
        update={
            "subtotal": totals.subtotal,
            "tax_total": totals.tax_total,
            "grand_total": totals.grand_total,
        }
    )
