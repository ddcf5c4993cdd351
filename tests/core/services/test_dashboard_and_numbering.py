"""Tests for dashboard statistics and number generation."""

import re

import pytest

from swipelite.core.entities import InvoiceStatus
from swipelite.core.services.dashboard import DashboardStats, compute_dashboard_stats
from swipelite.core.services.numbering import generate_invoice_number, generate_sku, new_id


class TestDashboardStats:
    """Tests for compute_dashboard_stats."""

    def test_empty(self):
        assert compute_dashboard_stats([]) == DashboardStats()

    def test_aggregates(self, sample_invoice):
        paid = sample_invoice.model_copy(
            update={"id": "inv2", "status": InvoiceStatus.PAID, "grand_total": 100, "tax_total": 10}
        )
        overdue = sample_invoice.model_copy(update={"id": "inv3", "status": InvoiceStatus.OVERDUE})

        stats = compute_dashboard_stats([sample_invoice, paid, overdue])

        assert stats.total_sales == pytest.approx(1439.6 * 2 + 100)
        assert stats.total_tax == pytest.approx(219.6 * 2 + 10)
        assert stats.pending_payments == 2
        assert stats.invoice_count == 3

    def test_recent_limited_to_five(self, sample_invoice):
        invoices = [sample_invoice.model_copy(update={"id": f"i{n}"}) for n in range(8)]
        stats = compute_dashboard_stats(invoices)
        assert [i.id for i in stats.recent] == ["i0", "i1", "i2", "i3", "i4"]


class TestNumbering:
    """Tests for id, invoice number and SKU generation."""

    def test_invoice_number_last_six_digits(self):
        assert generate_invoice_number(now_ms=1709612345678) == "INV-345678"

    def test_invoice_number_prefix(self):
        assert generate_invoice_number("BILL/", now_ms=1000000123456) == "BILL/123456"

    def test_invoice_number_from_clock(self):
        assert re.fullmatch(r"INV-\d{6}", generate_invoice_number())

    def test_new_id(self):
        value = new_id()
        assert re.fullmatch(r"[a-z0-9]{9}", value)
        assert new_id() != value

    def test_sku(self):
        assert re.fullmatch(r"SKU-[A-Z0-9]{6}", generate_sku())
