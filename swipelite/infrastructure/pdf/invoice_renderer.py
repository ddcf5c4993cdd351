"""
Invoice PDF renderer using fpdf2.

Lays out an assembled invoice document on the page size of its paper
format. Thermal receipts use a narrow roll cut to the height of the laid
out content; sheet formats get a page-numbered footer.
"""

import re

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException

from swipelite.config import get_logger
from swipelite.config.settings import PdfSettings, get_settings
from swipelite.core.exceptions import RenderError
from swipelite.core.interfaces.renderer import IPdfRenderer
from swipelite.core.services.document import InvoiceDocument
from swipelite.core.services.slots import ResolvedField

logger = get_logger(__name__)

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

# Characters the built-in PDF fonts cannot encode
_REPLACEMENTS = {"—": "-", "–": "-", "₹": "Rs.", "“": '"', "”": '"', "’": "'"}


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb``; anything else falls back to black."""
    match = _HEX_COLOR_RE.match(color.strip())
    if not match:
        return (0, 0, 0)
    value = match.group(1)
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def _safe_text(text: str) -> str:
    """Return *text* encodable in the core latin-1 fonts."""
    for src, dst in _REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", errors="replace").decode("latin-1")


# Scratch roll length for measuring thermal receipts, under the PDF page limit
_MEASURE_ROLL_MM = 5000.0
THERMAL_MARGIN_MM = 3.0


# ---------------------------------------------------------------------------
# Custom FPDF subclass with page-number footer
# ---------------------------------------------------------------------------


class _InvoicePdf(FPDF):
    """FPDF subclass that renders a footer on every sheet page."""

    def __init__(
        self,
        pdf_settings: PdfSettings,
        document: InvoiceDocument,
        roll_mm: float = _MEASURE_ROLL_MM,
    ) -> None:
        paper = document.paper
        height = paper.height_mm if paper.height_mm is not None else roll_mm
        super().__init__(orientation="P", unit="mm", format=(paper.width_mm, height))
        self._pdf_settings = pdf_settings
        self._thermal = paper.is_thermal

    def footer(self) -> None:
        """Render footer text and page numbers (sheets only)."""
        if self._thermal:
            return
        self.set_y(-12)
        self.set_font(self._pdf_settings.font_family, "I", 7)
        self.set_text_color(128, 128, 128)
        self.cell(0, 5, _safe_text(self._pdf_settings.footer_text), align="L")
        self.set_x(-40)
        self.cell(0, 5, f"Page {self.page_no()} of {{nb}}", align="R")
        self.set_text_color(0, 0, 0)


# ---------------------------------------------------------------------------
# Concrete renderer
# ---------------------------------------------------------------------------


class Fpdf2InvoiceRenderer(IPdfRenderer):
    """Renders invoice documents to PDF with fpdf2."""

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, document: InvoiceDocument) -> bytes:
        """Render *document* into PDF bytes."""
        try:
            if document.paper.is_thermal:
                pdf = self._layout(document, self.thermal_height_mm(document))
            else:
                pdf = self._layout(document)
            output = bytes(pdf.output())
        except FPDFException as e:
            raise RenderError("pdf", str(e)) from e

        logger.debug(
            "invoice_pdf_rendered",
            invoice_number=document.invoice_number,
            paper=document.paper.format.value,
            size=len(output),
        )
        return output

    def thermal_height_mm(self, document: InvoiceDocument) -> float:
        """
        Roll length that fits *document* without clipping.

        Lays the receipt out on a scratch roll and measures where the content
        ends, so wrapped addresses and long field values are accounted for.
        """
        try:
            scratch = self._layout(document)
        except FPDFException as e:
            raise RenderError("pdf", str(e)) from e
        return scratch.get_y() + THERMAL_MARGIN_MM

    def _layout(self, document: InvoiceDocument, roll_mm: float = _MEASURE_ROLL_MM) -> FPDF:
        thermal = document.paper.is_thermal
        margin = THERMAL_MARGIN_MM if thermal else 10.0

        pdf = _InvoicePdf(self._settings, document, roll_mm)
        pdf.alias_nb_pages()
        pdf.set_margins(margin, margin, margin)
        pdf.set_auto_page_break(auto=not thermal, margin=18)
        pdf.add_page()

        accent = hex_to_rgb(document.accent_color)
        self._render_header(pdf, document, accent)
        self._render_fields(pdf, document.slots.header)
        self._render_meta(pdf, document)
        self._render_customer(pdf, document)
        self._render_fields(pdf, document.slots.above_items)
        self._render_items_table(pdf, document, accent)
        self._render_fields(pdf, document.slots.below_items)
        self._render_totals(pdf, document, accent)
        self._render_fields(pdf, document.slots.footer)
        return pdf

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _font(self, pdf: FPDF, style: str = "", size: int | None = None) -> None:
        pdf.set_font(self._settings.font_family, style, size or self._settings.body_font_size)

    def _line(self, pdf: FPDF, text: str, h: float = 4.5, align: str = "L") -> None:
        pdf.multi_cell(
            0, h, _safe_text(text), align=align,
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

    @staticmethod
    def _currency(value: float) -> str:
        return _safe_text(f"{get_settings().billing.currency_symbol}{value:,.2f}")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(
        self, pdf: FPDF, document: InvoiceDocument, accent: tuple[int, int, int]
    ) -> None:
        """Seller block and title."""
        thermal = document.paper.is_thermal
        seller = document.seller

        pdf.set_text_color(*accent)
        self._font(pdf, "B", 11 if thermal else 16)
        self._line(pdf, seller.name, h=6, align="C" if thermal else "L")
        pdf.set_text_color(0, 0, 0)

        self._font(pdf, "", 7 if thermal else 9)
        align = "C" if thermal else "L"
        if seller.address:
            self._line(pdf, seller.address, align=align)
        contact = " | ".join(
            part for part in (
                f"GSTIN: {seller.gstin}" if seller.gstin else "",
                f"Tel: {seller.phone}" if seller.phone else "",
                seller.email,
            ) if part
        )
        if contact:
            self._line(pdf, contact, align=align)

        pdf.ln(2)
        self._font(pdf, "B", 10 if thermal else 14)
        self._line(pdf, "TAX INVOICE", h=7, align="C")
        self._render_separator(pdf)

    def _render_meta(self, pdf: FPDF, document: InvoiceDocument) -> None:
        self._font(pdf)
        self._line(pdf, f"Invoice No: {document.invoice_number}")
        self._line(pdf, f"Date: {document.date:%d-%m-%Y}")
        self._line(pdf, f"Status: {document.status.value}")
        pdf.ln(1)

    def _render_customer(self, pdf: FPDF, document: InvoiceDocument) -> None:
        customer = document.customer
        self._font(pdf, "B")
        self._line(pdf, "Bill To:")
        if customer.missing:
            self._font(pdf, "I")
            pdf.set_text_color(185, 28, 28)
            self._line(pdf, "Customer not selected")
            pdf.set_text_color(0, 0, 0)
        else:
            self._font(pdf)
            for value in (customer.name, customer.address, customer.phone, customer.email):
                if value:
                    self._line(pdf, value)
            if customer.gstin:
                self._line(pdf, f"GSTIN: {customer.gstin}")
        pdf.ln(2)

    def _render_fields(self, pdf: FPDF, fields: list[ResolvedField]) -> None:
        if not fields:
            return
        for f in fields:
            self._font(pdf, "B")
            label = _safe_text(f"{f.label}: ")
            pdf.cell(pdf.get_string_width(label) + 1, 4.5, label)
            self._font(pdf)
            self._line(pdf, f.value)
        pdf.ln(1)

    @staticmethod
    def _render_separator(pdf: FPDF) -> None:
        y = pdf.get_y()
        pdf.set_draw_color(120, 120, 120)
        pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(2)

    def _render_items_table(
        self, pdf: FPDF, document: InvoiceDocument, accent: tuple[int, int, int]
    ) -> None:
        """Items table with accent header row and alternating shading."""
        width = pdf.w - pdf.l_margin - pdf.r_margin
        if document.paper.is_thermal:
            headers = ["Item", "Qty", "Amount"]
            col_widths = [width * 0.5, width * 0.15, width * 0.35]
        else:
            headers = ["#", "Item", "Qty", "Rate", "Amount"]
            col_widths = [width * 0.07, width * 0.45, width * 0.12, width * 0.18, width * 0.18]

        self._font(pdf, "B")
        pdf.set_fill_color(*accent)
        pdf.set_text_color(255, 255, 255)
        for w, header in zip(col_widths, headers):
            pdf.cell(w, 6, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        if not document.lines:
            self._font(pdf, "I")
            pdf.cell(width, 6, "No items added", border=1, align="C")
            pdf.ln()

        for line in document.lines:
            fill = line.index % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)
            self._font(pdf)
            if document.paper.is_thermal:
                cells = [
                    (line.name[:28], "L"),
                    (str(line.quantity), "R"),
                    (f"{line.amount:,.2f}", "R"),
                ]
            else:
                cells = [
                    (str(line.index), "C"),
                    (line.name[:48], "L"),
                    (str(line.quantity), "R"),
                    (f"{line.price:,.2f}", "R"),
                    (f"{line.amount:,.2f}", "R"),
                ]
            for w, (text, align) in zip(col_widths, cells):
                pdf.cell(w, 6, _safe_text(text), border=1, align=align, fill=fill)
            pdf.ln()

            if line.details:
                self._font(pdf, "I", max(self._settings.body_font_size - 2, 6))
                pdf.set_text_color(100, 100, 100)
                for label, value in line.details:
                    pdf.cell(width, 4, _safe_text(f"   {label}: {value}"))
                    pdf.ln()
                pdf.set_text_color(0, 0, 0)

        pdf.ln(2)

    def _render_totals(
        self, pdf: FPDF, document: InvoiceDocument, accent: tuple[int, int, int]
    ) -> None:
        """Subtotal, tax and grand total, right aligned."""
        width = pdf.w - pdf.l_margin - pdf.r_margin
        label_w = width * 0.6
        totals = document.totals

        self._font(pdf)
        rows = [
            ("Subtotal:", totals.subtotal),
            (f"GST ({document.tax_rate * 100:g}%):", totals.tax_total),
        ]
        for label, value in rows:
            pdf.cell(label_w, 5, label, align="R")
            pdf.cell(0, 5, self._currency(value), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        self._font(pdf, "B", self._settings.body_font_size + 2)
        pdf.set_text_color(*accent)
        pdf.cell(label_w, 7, "Grand Total:", align="R")
        pdf.cell(
            0, 7, self._currency(totals.grand_total), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.set_text_color(0, 0, 0)
        pdf.ln(2)
