"""
Tally XML voucher export.

Produces an "Import Data" envelope holding one Sales voucher with three
ledger entries: the party debit, the sales credit and the GST credit.
"""

import xml.etree.ElementTree as ET
from datetime import datetime

from swipelite.core.entities import BusinessProfile, Customer, Invoice
from swipelite.core.services.document import WALK_IN_PARTY, InvoiceDocument

TALLY_MIME_TYPE = "text/xml"
SALES_LEDGER = "Sales Account"
TAX_LEDGER = "GST Output"


def format_amount(value: float) -> str:
    """Render an amount without trailing zeros (``1180``, ``219.6``)."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def _ledger_entry(parent: ET.Element, name: str, deemed_positive: bool, amount: float) -> None:
    entry = ET.SubElement(parent, "ALLLEDGERENTRIES.LIST")
    ET.SubElement(entry, "LEDGERNAME").text = name
    ET.SubElement(entry, "ISDEEMEDPOSITIVE").text = "Yes" if deemed_positive else "No"
    ET.SubElement(entry, "AMOUNT").text = format_amount(amount)


def build_voucher_xml(
    date: datetime,
    voucher_number: str,
    party: str,
    subtotal: float,
    tax_total: float,
    grand_total: float,
) -> str:
    """Serialize one Sales voucher envelope."""
    envelope = ET.Element("ENVELOPE")
    header = ET.SubElement(envelope, "HEADER")
    ET.SubElement(header, "TALLYREQUEST").text = "Import Data"

    body = ET.SubElement(envelope, "BODY")
    import_data = ET.SubElement(body, "IMPORTDATA")
    request_desc = ET.SubElement(import_data, "REQUESTDESC")
    ET.SubElement(request_desc, "REPORTNAME").text = "Vouchers"

    request_data = ET.SubElement(import_data, "REQUESTDATA")
    message = ET.SubElement(request_data, "TALLYMESSAGE", {"xmlns:UDF": "TallyUDF"})
    voucher = ET.SubElement(
        message,
        "VOUCHER",
        {"VCHTYPE": "Sales", "ACTION": "Create", "OBJVIEW": "Accounting Voucher View"},
    )
    ET.SubElement(voucher, "DATE").text = date.strftime("%Y%m%d")
    ET.SubElement(voucher, "VOUCHERNUMBER").text = voucher_number
    ET.SubElement(voucher, "PARTYLEDGERNAME").text = party
    ET.SubElement(voucher, "PERSISTEDVIEW").text = "Accounting Voucher View"

    _ledger_entry(voucher, party, True, -grand_total)
    _ledger_entry(voucher, SALES_LEDGER, False, subtotal)
    _ledger_entry(voucher, TAX_LEDGER, False, tax_total)

    ET.indent(envelope, space=" ")
    return '<?xml version="1.0"?>\n' + ET.tostring(envelope, encoding="unicode")


def generate_tally_xml(
    invoice: Invoice,
    profile: BusinessProfile,
    customer: Customer | None = None,
) -> str:
    """
    Voucher XML for a stored invoice.

    Walk-in sales (no customer) post to the ``Cash`` ledger. *profile* is
    the issuing business; Tally takes the company from the import target.
    """
    return build_voucher_xml(
        date=invoice.date,
        voucher_number=invoice.invoice_number,
        party=customer.name if customer and customer.name else WALK_IN_PARTY,
        subtotal=invoice.subtotal,
        tax_total=invoice.tax_total,
        grand_total=invoice.grand_total,
    )


def document_to_tally_xml(document: InvoiceDocument) -> str:
    """Voucher XML for an assembled invoice document."""
    return build_voucher_xml(
        date=document.date,
        voucher_number=document.invoice_number,
        party=document.customer.party_name,
        subtotal=document.totals.subtotal,
        tax_total=document.totals.tax_total,
        grand_total=document.totals.grand_total,
    )
