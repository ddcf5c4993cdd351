"""Export adapters: Tally XML and printable HTML."""

from swipelite.infrastructure.export.print_html import HtmlPrintRenderer
from swipelite.infrastructure.export.tally import (
    TALLY_MIME_TYPE,
    document_to_tally_xml,
    format_amount,
    generate_tally_xml,
)

__all__ = [
    "HtmlPrintRenderer",
    "TALLY_MIME_TYPE",
    "document_to_tally_xml",
    "format_amount",
    "generate_tally_xml",
]
