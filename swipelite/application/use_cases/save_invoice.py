"""Save Invoice Use Case: finalizes a composer and stores the result."""

from dataclasses import dataclass

from swipelite.application.invoice_composer import InvoiceComposer
from swipelite.application.state import AppState
from swipelite.config import get_logger
from swipelite.core.entities import Invoice

logger = get_logger(__name__)


@dataclass
class SaveInvoiceResult:
    """Result of saving an invoice."""

    invoice: Invoice
    created: bool


class SaveInvoiceUseCase:
    """Validate, total and persist the invoice being composed."""

    def __init__(self, state: AppState):
        self._state = state

    async def execute(self, composer: InvoiceComposer) -> SaveInvoiceResult:
        """
        Finalize and store *composer*'s invoice.

        Raises:
            ValidationError: No customer selected or no items added.
        """
        invoice = composer.finalize()
        created = self._state.get_invoice(invoice.id) is None

        logger.info(
            "save_invoice_started",
            invoice_number=invoice.invoice_number,
            items=len(invoice.items),
            created=created,
        )
        stored = await self._state.save_invoice(invoice)
        return SaveInvoiceResult(invoice=stored, created=created)
