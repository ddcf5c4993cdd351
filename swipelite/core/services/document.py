"""
Invoice document assembly.

Combines a business profile, an optional customer, a template and priced
line items into the single structure every presentation channel (preview,
print, PDF, Tally XML) renders from.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from swipelite.core.entities.catalog import Customer
from swipelite.core.entities.invoice import InvoiceStatus, LineItem
from swipelite.core.entities.profile import BusinessProfile
from swipelite.core.entities.template import BaseStyle, InvoiceTemplate, PaperFormat
from swipelite.core.services.pricing import TAX_RATE, Totals, compute_totals
from swipelite.core.services.slots import ResolvedSlots, resolve_slots

WALK_IN_PARTY = "Cash"


@dataclass(frozen=True)
class PaperSpec:
    """Page geometry for a paper format, in millimetres."""

    format: PaperFormat
    width_mm: float
    height_mm: float | None  # None for continuous thermal rolls

    @property
    def is_thermal(self) -> bool:
        return self.format.is_thermal

    @classmethod
    def for_format(cls, paper_format: PaperFormat) -> "PaperSpec":
        width, height = paper_format.size_mm
        return cls(format=paper_format, width_mm=width, height_mm=height)


@dataclass(frozen=True)
class SellerBlock:
    """Business profile details printed at the top of the sheet."""

    profile_id: str
    name: str
    address: str
    gstin: str
    phone: str
    email: str


@dataclass(frozen=True)
class CustomerBlock:
    """Billed party, or a marker that none has been selected yet."""

    missing: bool
    customer_id: str | None = None
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    gstin: str | None = None

    @property
    def party_name(self) -> str:
        """Ledger name used for accounting exports."""
        return self.name if not self.missing and self.name else WALK_IN_PARTY


@dataclass(frozen=True)
class DocumentLine:
    """A numbered, priced row of the items table."""

    index: int
    product_id: str
    name: str
    quantity: int
    price: float
    amount: float
    details: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class InvoiceDocument:
    """Renderable invoice; the one input of all output adapters."""

    invoice_number: str
    date: datetime
    status: InvoiceStatus
    seller: SellerBlock
    customer: CustomerBlock
    template_id: str
    template_name: str
    base_style: BaseStyle
    accent_color: str
    paper: PaperSpec
    lines: tuple[DocumentLine, ...]
    totals: Totals
    slots: ResolvedSlots = field(default_factory=ResolvedSlots)
    tax_rate: float = TAX_RATE

    @property
    def has_items(self) -> bool:
        return bool(self.lines)

    @property
    def pdf_filename(self) -> str:
        return f"Invoice_{self.invoice_number}.pdf"

    @property
    def tally_filename(self) -> str:
        return f"{self.invoice_number}_Tally.xml"

    @property
    def print_filename(self) -> str:
        return f"Invoice_{self.invoice_number}.html"


def _seller_block(profile: BusinessProfile) -> SellerBlock:
    return SellerBlock(
        profile_id=profile.id,
        name=profile.name,
        address=profile.address,
        gstin=profile.gstin,
        phone=profile.phone,
        email=profile.email,
    )


def _customer_block(customer: Customer | None) -> CustomerBlock:
    if customer is None:
        return CustomerBlock(missing=True)
    return CustomerBlock(
        missing=False,
        customer_id=customer.id,
        name=customer.name,
        phone=customer.phone,
        email=customer.email,
        address=customer.address,
        gstin=customer.gstin,
    )


def _document_lines(items: Sequence[LineItem]) -> tuple[DocumentLine, ...]:
    return tuple(
        DocumentLine(
            index=idx,
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            price=item.price,
            amount=item.line_total,
            details=tuple(item.dynamic_values.items()),
        )
        for idx, item in enumerate(items, 1)
    )


def assemble_document(
    profile: BusinessProfile,
    customer: Customer | None,
    template: InvoiceTemplate,
    items: Sequence[LineItem],
    custom_field_data: Mapping[str, str] | None,
    invoice_number: str,
    date: datetime,
    status: InvoiceStatus = InvoiceStatus.UNPAID,
) -> InvoiceDocument:
    """
    Build the renderable document for an invoice.

    Args:
        profile: Seller profile.
        customer: Billed customer, or None while one is still being chosen.
        template: Layout template.
        items: Line items in display order.
        custom_field_data: Per-invoice values keyed by custom field id.
        invoice_number: Human-readable invoice number.
        date: Issue date; the only time input, no clock is read here.
        status: Payment status shown on the sheet.

    Returns:
        InvoiceDocument with totals and resolved template slots.
    """
    return InvoiceDocument(
        invoice_number=invoice_number,
        date=date,
        status=status,
        seller=_seller_block(profile),
        customer=_customer_block(customer),
        template_id=template.id,
        template_name=template.name,
        base_style=template.base_style,
        accent_color=template.accent_color,
        paper=PaperSpec.for_format(template.paper_format),
        lines=_document_lines(items),
        totals=compute_totals(items),
        slots=resolve_slots(template, custom_field_data),
    )
