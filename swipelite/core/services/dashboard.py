"""Summary statistics for the dashboard view."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from swipelite.core.entities.invoice import Invoice, InvoiceStatus


@dataclass(frozen=True)
class DashboardStats:
    """Aggregates over all stored invoices."""

    total_sales: float = 0.0
    total_tax: float = 0.0
    pending_payments: int = 0
    invoice_count: int = 0
    recent: list[Invoice] = field(default_factory=list)


def compute_dashboard_stats(invoices: Sequence[Invoice], recent_limit: int = 5) -> DashboardStats:
    """
    Sum sales and tax, and count invoices not yet paid.

    *invoices* is expected newest first, as the store keeps them.
    """
    return DashboardStats(
        total_sales=sum((inv.grand_total for inv in invoices), 0.0),
        total_tax=sum((inv.tax_total for inv in invoices), 0.0),
        pending_payments=sum(1 for inv in invoices if inv.status != InvoiceStatus.PAID),
        invoice_count=len(invoices),
        recent=list(invoices[:recent_limit]),
    )
