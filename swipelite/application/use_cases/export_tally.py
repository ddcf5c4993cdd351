"""Export Tally Use Case: builds the voucher XML download for an invoice."""

from dataclasses import dataclass

from swipelite.application.state import AppState
from swipelite.config import get_logger
from swipelite.core.entities import Invoice
from swipelite.infrastructure.export.tally import TALLY_MIME_TYPE, document_to_tally_xml

logger = get_logger(__name__)


@dataclass
class ExportFile:
    """A generated file ready to be written or downloaded."""

    filename: str
    mime_type: str
    content: str


class ExportTallyUseCase:
    """Export a stored invoice as a Tally Sales voucher."""

    def __init__(self, state: AppState):
        self._state = state

    def execute(self, invoice: Invoice) -> ExportFile:
        """Build the voucher from the assembled document, like every other export."""
        document = self._state.assemble_for_invoice(invoice)
        content = document_to_tally_xml(document)

        logger.info(
            "tally_exported",
            invoice_number=document.invoice_number,
            party=document.customer.party_name,
            grand_total=document.totals.grand_total,
        )
        return ExportFile(
            filename=document.tally_filename,
            mime_type=TALLY_MIME_TYPE,
            content=content,
        )
