"""
Invoice composition.

Holds the working copy of an invoice while it is being built or edited,
and turns it into a stored ``Invoice`` once a customer and items are set.
"""

from collections.abc import Mapping
from datetime import datetime

from swipelite.application.state import AppState
from swipelite.config import get_logger, get_settings
from swipelite.core.entities import (
    DEFAULT_TAX_RATE,
    Invoice,
    InvoiceStatus,
    InvoiceTemplate,
    LineItem,
    Product,
)
from swipelite.core.exceptions import EntityNotFoundError, ValidationError
from swipelite.core.services.document import InvoiceDocument, assemble_document
from swipelite.core.services.numbering import generate_invoice_number, new_id
from swipelite.core.services.pricing import Totals, compute_totals

logger = get_logger(__name__)

CUSTOM_PRODUCT_PREFIX = "custom-"


class InvoiceComposer:
    """Working copy of an invoice being composed."""

    def __init__(
        self,
        state: AppState,
        template: InvoiceTemplate,
        invoice_number: str,
        original: Invoice | None = None,
    ):
        self._state = state
        self._original = original
        self.template = template
        self.invoice_number = invoice_number
        self.customer_id: str = original.customer_id if original else ""
        self.items: list[LineItem] = (
            [item.model_copy(deep=True) for item in original.items] if original else []
        )
        self.custom_field_data: dict[str, str] = (
            dict(original.custom_field_data) if original else {}
        )

    @classmethod
    def new(cls, state: AppState, template_id: str | None = None) -> "InvoiceComposer":
        """Start a new invoice on the given template, or the default one."""
        template = state.default_template
        if template_id is not None:
            template = state.get_template(template_id) or template
        prefix = get_settings().billing.invoice_prefix
        return cls(state, template, generate_invoice_number(prefix))

    @classmethod
    def edit(cls, state: AppState, invoice: Invoice) -> "InvoiceComposer":
        """Reopen a stored invoice with its own template."""
        return cls(state, state.template_for(invoice), invoice.invoice_number, original=invoice)

    @property
    def is_editing(self) -> bool:
        return self._original is not None

    @property
    def totals(self) -> Totals:
        return compute_totals(self.items)

    def _find(self, product_id: str) -> LineItem | None:
        return next((i for i in self.items if i.product_id == product_id), None)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_product(self, product: Product) -> LineItem:
        """
        Add one unit of *product*.

        A product already on the invoice gets its quantity bumped. A new
        line copies the product's name, price and fixed field values.
        """
        existing = self._find(product.id)
        if existing is not None:
            existing.quantity += 1
            return existing

        item = LineItem(
            product_id=product.id,
            name=product.name,
            price=product.price,
            quantity=1,
            tax_rate=DEFAULT_TAX_RATE,
            dynamic_values=product.fixed_values,
        )
        self.items.append(item)
        return item

    def apply_customized_item(
        self,
        product_id: str,
        name: str,
        price: float,
        dynamic_values: Mapping[str, str],
    ) -> LineItem:
        """
        Apply a customized line: new name, price and field values.

        Values are checked against the product's declared fields; per-sale
        fields must be filled in.
        """
        values = dict(dynamic_values)
        product = self._state.get_product(product_id)
        if product is not None:
            unknown = set(values) - set(product.field_labels)
            if unknown:
                raise ValidationError(
                    "dynamic_values", f"Unknown fields for {product.name}", sorted(unknown)
                )
            for f in product.dynamic_fields:
                if f.is_dynamic and not values.get(f.label, "").strip():
                    raise ValidationError(f.label, "Value required for this sale")
                if not f.is_dynamic:
                    values.setdefault(f.label, f.default_value)

        existing = self._find(product_id)
        if existing is not None:
            existing.name = name
            existing.price = price
            existing.dynamic_values = values
            return existing

        item = LineItem(
            product_id=product_id,
            name=name,
            price=price,
            quantity=1,
            tax_rate=DEFAULT_TAX_RATE,
            dynamic_values=values,
        )
        self.items.append(item)
        return item

    def add_custom_line(self, name: str, price: float, quantity: int = 1) -> LineItem:
        """Add an ad-hoc line that does not refer to a stored product."""
        item = LineItem(
            product_id=f"{CUSTOM_PRODUCT_PREFIX}{new_id(6)}",
            name=name,
            price=price,
            quantity=quantity,
            tax_rate=DEFAULT_TAX_RATE,
        )
        self.items.append(item)
        return item

    def remove_item(self, product_id: str) -> None:
        self.items = [i for i in self.items if i.product_id != product_id]

    def set_quantity(self, product_id: str, quantity: int) -> None:
        item = self._find(product_id)
        if item is None:
            raise EntityNotFoundError("LineItem", product_id)
        item.quantity = quantity

    # ------------------------------------------------------------------
    # Header data
    # ------------------------------------------------------------------

    def select_customer(self, customer_id: str) -> None:
        if self._state.get_customer(customer_id) is None:
            raise EntityNotFoundError("Customer", customer_id)
        self.customer_id = customer_id

    def select_template(self, template_id: str) -> None:
        template = self._state.get_template(template_id)
        if template is None:
            raise EntityNotFoundError("InvoiceTemplate", template_id)
        self.template = template

    def set_custom_field(self, field_id: str, value: str) -> None:
        custom_field = next((f for f in self.template.custom_fields if f.id == field_id), None)
        if custom_field is None:
            raise ValidationError("custom_field", "Not a field of the selected template", field_id)
        if not custom_field.is_editable:
            raise ValidationError(custom_field.label, "Field has a fixed value")
        self.custom_field_data[field_id] = value

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def preview(self, date: datetime | None = None) -> InvoiceDocument:
        """Assemble the document as it currently stands."""
        if date is None:
            date = self._original.date if self._original else datetime.now()
        customer = self._state.get_customer(self.customer_id) if self.customer_id else None
        return assemble_document(
            profile=self._state.active_profile,
            customer=customer,
            template=self.template,
            items=self.items,
            custom_field_data=self.custom_field_data,
            invoice_number=self.invoice_number,
            date=date,
            status=self._original.status if self._original else InvoiceStatus.UNPAID,
        )

    def finalize(self, now: datetime | None = None) -> Invoice:
        """
        Build the invoice to store.

        Raises:
            ValidationError: No customer selected or no items added.
        """
        if not self.customer_id:
            raise ValidationError("customer_id", "Please select a customer and add items")
        if not self.items:
            raise ValidationError("items", "Please select a customer and add items")

        totals = self.totals
        original = self._original
        invoice = Invoice(
            id=original.id if original else new_id(),
            invoice_number=self.invoice_number,
            date=original.date if original else (now or datetime.now()),
            customer_id=self.customer_id,
            items=[item.model_copy(deep=True) for item in self.items],
            subtotal=totals.subtotal,
            tax_total=totals.tax_total,
            grand_total=totals.grand_total,
            status=original.status if original else InvoiceStatus.UNPAID,
            profile_id=self._state.active_profile.id,
            template_id=self.template.id,
            custom_field_data=dict(self.custom_field_data),
        )
        logger.debug("invoice_finalized", invoice_number=invoice.invoice_number, items=len(invoice.items))
        return invoice
