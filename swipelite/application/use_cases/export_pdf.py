"""
Export PDF Use Case.

Renders an invoice document to PDF. Rendering runs in a worker thread; if
it fails, the printable HTML is returned instead so the user can still
print from the browser.
"""

import asyncio
from dataclasses import dataclass

from swipelite.config import get_logger
from swipelite.core.exceptions import RenderError
from swipelite.core.interfaces import IPdfRenderer, IPrintRenderer
from swipelite.core.services.document import InvoiceDocument

logger = get_logger(__name__)

PDF_FALLBACK_MESSAGE = "PDF generation failed. Please use the Print option instead."


@dataclass
class PdfExportResult:
    """Result of PDF export."""

    filename: str
    pdf_bytes: bytes | None = None
    fallback_html: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.pdf_bytes is not None


class ExportPdfUseCase:
    """
    Use case for invoice PDF downloads.

    Flow:
    1. Render the document via the PDF renderer, off the event loop
    2. On failure, log and render the print markup as fallback
    """

    def __init__(
        self,
        renderer: IPdfRenderer | None = None,
        print_renderer: IPrintRenderer | None = None,
    ):
        self._renderer = renderer
        self._print_renderer = print_renderer

    def _get_renderer(self) -> IPdfRenderer:
        if self._renderer is None:
            from swipelite.infrastructure.pdf import Fpdf2InvoiceRenderer

            self._renderer = Fpdf2InvoiceRenderer()
        return self._renderer

    def _get_print_renderer(self) -> IPrintRenderer:
        if self._print_renderer is None:
            from swipelite.infrastructure.export import HtmlPrintRenderer

            self._print_renderer = HtmlPrintRenderer()
        return self._print_renderer

    async def execute(self, document: InvoiceDocument) -> PdfExportResult:
        logger.info(
            "export_pdf_started",
            invoice_number=document.invoice_number,
            paper=document.paper.format.value,
        )

        try:
            pdf_bytes = await asyncio.to_thread(self._get_renderer().render, document)
        except (RenderError, OSError, ValueError) as e:
            logger.error(
                "export_pdf_failed",
                invoice_number=document.invoice_number,
                error=str(e),
            )
            return PdfExportResult(
                filename=document.pdf_filename,
                fallback_html=self._get_print_renderer().render(document),
                error=PDF_FALLBACK_MESSAGE,
            )

        logger.info(
            "export_pdf_complete",
            invoice_number=document.invoice_number,
            file_size=len(pdf_bytes),
        )
        return PdfExportResult(filename=document.pdf_filename, pdf_bytes=pdf_bytes)
