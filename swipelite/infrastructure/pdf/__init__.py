"""PDF generation infrastructure."""

from swipelite.infrastructure.pdf.invoice_renderer import Fpdf2InvoiceRenderer, hex_to_rgb

__all__ = [
    "Fpdf2InvoiceRenderer",
    "hex_to_rgb",
]
