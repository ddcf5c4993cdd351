"""
Printable HTML rendering.

Builds a standalone page whose sheet is sized to the template's paper
format. Print CSS hides everything except the sheet and prints it at
natural scale; the ``scale`` argument only affects on-screen preview.
"""

import html

from swipelite.config import get_settings
from swipelite.core.entities import BaseStyle
from swipelite.core.interfaces.renderer import IPrintRenderer
from swipelite.core.services.document import InvoiceDocument
from swipelite.core.services.slots import ResolvedField

_STYLE_RULES = {
    BaseStyle.TALLY: (
        ".items th, .items td { border: 1px solid #333; }"
        " .sheet-title { border-bottom: 2px solid #333; }"
    ),
    BaseStyle.MODERN: (
        ".sheet-title { background: var(--accent); color: #fff; padding: 4mm; }"
        " .items th { background: var(--accent); color: #fff; }"
        " .items td { border-bottom: 1px solid #e5e7eb; }"
    ),
    BaseStyle.MINIMAL: (
        ".items th { border-bottom: 1px solid #999; }"
        " .sheet-title { font-weight: 300; letter-spacing: 0.2em; }"
    ),
}


def _esc(value: object) -> str:
    return html.escape(str(value))


def _money(value: float) -> str:
    return f"{get_settings().billing.currency_symbol}{value:,.2f}"


def _fields_html(fields: list[ResolvedField], css_class: str) -> str:
    if not fields:
        return ""
    rows = "".join(
        f"<div class='field'><span class='label'>{_esc(f.label)}:</span> "
        f"<span class='value'>{_esc(f.value)}</span></div>"
        for f in fields
    )
    return f"<div class='{css_class}'>{rows}</div>"


def page_css(document: InvoiceDocument, scale: float = 1.0) -> str:
    """CSS for the sheet, including the @page size rule."""
    paper = document.paper
    width = f"{paper.width_mm}mm"
    height = f"{paper.height_mm}mm" if paper.height_mm is not None else "auto"
    page_size = f"{width} {height}"
    body_font = "8pt" if paper.is_thermal else "10pt"

    return f"""
:root {{ --accent: {_esc(document.accent_color)}; }}
@page {{ size: {page_size}; margin: 0; }}
body {{ margin: 0; background: #f3f4f6; font-family: Helvetica, Arial, sans-serif; }}
.invoice-sheet {{
  width: {width}; min-height: {height}; box-sizing: border-box;
  padding: {"4mm" if paper.is_thermal else "12mm"}; background: #fff;
  font-size: {body_font}; transform: scale({scale}); transform-origin: top left;
}}
.sheet-title {{ text-align: center; color: var(--accent); margin: 0 0 4mm; }}
.items {{ width: 100%; border-collapse: collapse; margin: 4mm 0; }}
.items th, .items td {{ padding: 1.5mm; text-align: left; }}
.items .num {{ text-align: right; }}
.details {{ color: #6b7280; font-size: 0.85em; }}
.totals {{ margin-left: auto; }}
.totals td {{ padding: 1mm 2mm; }}
.grand {{ font-weight: bold; color: var(--accent); }}
.missing {{ color: #b91c1c; font-style: italic; }}
{_STYLE_RULES[document.base_style]}
@media print {{
  body {{ background: none; }}
  body * {{ visibility: hidden; }}
  .invoice-sheet, .invoice-sheet * {{ visibility: visible; }}
  .invoice-sheet {{ position: absolute; left: 0; top: 0; transform: none; }}
}}
"""


class HtmlPrintRenderer(IPrintRenderer):
    """Renders an invoice document as a printable HTML page."""

    def render(self, document: InvoiceDocument, scale: float = 1.0) -> str:
        seller = document.seller
        customer = document.customer
        slots = document.slots

        if customer.missing:
            customer_html = "<div class='customer missing'>Customer not selected</div>"
        else:
            lines = [f"<strong>{_esc(customer.name)}</strong>"]
            for value in (customer.address, customer.phone, customer.email):
                if value:
                    lines.append(_esc(value))
            if customer.gstin:
                lines.append(f"GSTIN: {_esc(customer.gstin)}")
            customer_html = "<div class='customer'>Bill To:<br/>" + "<br/>".join(lines) + "</div>"

        rows = []
        for line in document.lines:
            details = "".join(
                f"<div class='details'>{_esc(label)}: {_esc(value)}</div>"
                for label, value in line.details
            )
            rows.append(
                f"<tr><td>{line.index}</td><td>{_esc(line.name)}{details}</td>"
                f"<td class='num'>{line.quantity}</td>"
                f"<td class='num'>{_money(line.price)}</td>"
                f"<td class='num'>{_money(line.amount)}</td></tr>"
            )
        if not rows:
            rows.append("<tr><td colspan='5' class='missing'>No items added</td></tr>")

        totals = document.totals
        tax_pct = f"{document.tax_rate * 100:g}"

        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8"/>
<title>Invoice {_esc(document.invoice_number)}</title>
<style>{page_css(document, scale)}</style>
</head>
<body>
<div class="invoice-sheet" data-paper="{document.paper.format.value}" data-style="{document.base_style.value}">
  <h1 class="sheet-title">TAX INVOICE</h1>
  <div class="seller">
    <strong>{_esc(seller.name)}</strong><br/>{_esc(seller.address)}<br/>
    GSTIN: {_esc(seller.gstin)} | Tel: {_esc(seller.phone)} | {_esc(seller.email)}
  </div>
  {_fields_html(slots.header, "header-fields")}
  <div class="meta">Invoice No: {_esc(document.invoice_number)} | Date: {document.date:%Y-%m-%d} | Status: {document.status.value}</div>
  {customer_html}
  {_fields_html(slots.above_items, "above-items-fields")}
  <table class="items">
    <thead><tr><th>#</th><th>Item</th><th class="num">Qty</th><th class="num">Rate</th><th class="num">Amount</th></tr></thead>
    <tbody>{"".join(rows)}</tbody>
  </table>
  {_fields_html(slots.below_items, "below-items-fields")}
  <table class="totals">
    <tr><td>Subtotal</td><td class="num">{_money(totals.subtotal)}</td></tr>
    <tr><td>GST ({tax_pct}%)</td><td class="num">{_money(totals.tax_total)}</td></tr>
    <tr class="grand"><td>Grand Total</td><td class="num">{_money(totals.grand_total)}</td></tr>
  </table>
  {_fields_html(slots.footer, "footer-fields")}
</div>
</body>
</html>
"""
