"""
Parse Smart Bill Use Case.

Turns an informal billing message ("2 coffee for Rohan 9876543210") into
a draft invoice. Parser failures are reported in the result, never raised.
"""

from dataclasses import dataclass, field

from swipelite.application.invoice_composer import InvoiceComposer
from swipelite.application.state import AppState
from swipelite.config import get_logger
from swipelite.core.entities import Customer, ParsedBill, ParsedBillItem, Product
from swipelite.core.exceptions import SwipeLiteError
from swipelite.core.interfaces import IBillParser

logger = get_logger(__name__)

EMPTY_TEXT_MESSAGE = "Describe the sale first, e.g. items, quantities and prices."
PARSE_FAILED_MESSAGE = (
    "AI couldn't parse the text. Try being more specific with quantities and prices."
)


@dataclass
class SmartBillResult:
    """Outcome of parsing a free-text bill."""

    composer: InvoiceComposer | None = None
    parsed: ParsedBill | None = None
    error: str | None = None
    customer: Customer | None = None
    unmatched_items: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def summary(self) -> str:
        if self.error is not None:
            return self.error
        items = self.parsed.items if self.parsed else []
        who = (self.parsed.customer_name if self.parsed else None) or "Walk-in customer"
        return f"AI detected: {len(items)} items for {who}."


def _normalize_phone(phone: str | None) -> str:
    return "".join(ch for ch in phone or "" if ch.isdigit())


def match_customer(customers: list[Customer], name: str | None, phone: str | None) -> Customer | None:
    """Match by phone digits first, then by case-insensitive name."""
    digits = _normalize_phone(phone)
    if digits:
        for customer in customers:
            if _normalize_phone(customer.phone) == digits:
                return customer
    if name and name.strip():
        wanted = name.strip().casefold()
        for customer in customers:
            if customer.name.strip().casefold() == wanted:
                return customer
    return None


def match_product(products: list[Product], name: str) -> Product | None:
    wanted = name.strip().casefold()
    return next((p for p in products if p.name.strip().casefold() == wanted), None)


class ParseSmartBillUseCase:
    """Parse billing text and prefill an invoice composer."""

    def __init__(self, state: AppState, parser: IBillParser | None = None):
        self._state = state
        self._parser = parser

    def _get_parser(self) -> IBillParser:
        if self._parser is None:
            from swipelite.infrastructure.llm import LLMBillParser

            self._parser = LLMBillParser()
        return self._parser

    async def execute(self, text: str) -> SmartBillResult:
        if not text.strip():
            return SmartBillResult(error=EMPTY_TEXT_MESSAGE)

        logger.info("smart_bill_started", text_len=len(text))

        try:
            parsed = await self._get_parser().parse(text)
        except SwipeLiteError as e:
            logger.warning("smart_bill_failed", error_code=e.code, error=e.message)
            return SmartBillResult(error=PARSE_FAILED_MESSAGE)

        composer = InvoiceComposer.new(self._state)
        customer = match_customer(self._state.customers, parsed.customer_name, parsed.phone)
        if customer is not None:
            composer.select_customer(customer.id)

        unmatched = []
        for item in parsed.items:
            if not item.name.strip():
                continue
            if not self._add_item(composer, item):
                unmatched.append(item.name)

        logger.info(
            "smart_bill_complete",
            items=len(parsed.items),
            unmatched=len(unmatched),
            customer_matched=customer is not None,
        )
        return SmartBillResult(
            composer=composer,
            parsed=parsed,
            customer=customer,
            unmatched_items=unmatched,
        )

    def _add_item(self, composer: InvoiceComposer, item: ParsedBillItem) -> bool:
        """Add *item* to the draft; returns False when no product matched."""
        quantity = max(1, round(item.quantity))
        product = match_product(self._state.products, item.name)

        if product is None:
            composer.add_custom_line(item.name.strip(), item.price, quantity)
            return False

        line = composer.add_product(product)
        composer.set_quantity(product.id, line.quantity - 1 + quantity)
        if item.price > 0:
            line.price = item.price
        return True
