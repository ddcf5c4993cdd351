"""Print Invoice Use Case: produces the printable HTML sheet."""

from dataclasses import dataclass

from swipelite.config import get_logger
from swipelite.core.interfaces import IPrintRenderer
from swipelite.core.services.document import InvoiceDocument

logger = get_logger(__name__)


@dataclass
class PrintResult:
    """Printable page for one invoice."""

    html: str
    filename: str


class PrintInvoiceUseCase:
    """Render an invoice document for the browser print dialog."""

    def __init__(self, renderer: IPrintRenderer | None = None):
        self._renderer = renderer

    def _get_renderer(self) -> IPrintRenderer:
        if self._renderer is None:
            from swipelite.infrastructure.export import HtmlPrintRenderer

            self._renderer = HtmlPrintRenderer()
        return self._renderer

    def execute(self, document: InvoiceDocument, scale: float = 1.0) -> PrintResult:
        """
        Args:
            document: Assembled invoice
            scale: On-screen preview zoom; printing ignores it
        """
        html = self._get_renderer().render(document, scale=scale)
        logger.info(
            "print_rendered",
            invoice_number=document.invoice_number,
            paper=document.paper.format.value,
            scale=scale,
        )
        return PrintResult(html=html, filename=document.print_filename)
