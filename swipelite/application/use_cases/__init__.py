"""Application use cases."""

from swipelite.application.use_cases.business_insights import (
    FALLBACK_INSIGHTS,
    BusinessInsightsUseCase,
)
from swipelite.application.use_cases.export_pdf import ExportPdfUseCase, PdfExportResult
from swipelite.application.use_cases.export_tally import ExportFile, ExportTallyUseCase
from swipelite.application.use_cases.parse_smart_bill import (
    ParseSmartBillUseCase,
    SmartBillResult,
)
from swipelite.application.use_cases.print_invoice import PrintInvoiceUseCase, PrintResult
from swipelite.application.use_cases.save_invoice import SaveInvoiceResult, SaveInvoiceUseCase

__all__ = [
    "SaveInvoiceUseCase",
    "SaveInvoiceResult",
    "ExportTallyUseCase",
    "ExportFile",
    "ExportPdfUseCase",
    "PdfExportResult",
    "PrintInvoiceUseCase",
    "PrintResult",
    "ParseSmartBillUseCase",
    "SmartBillResult",
    "BusinessInsightsUseCase",
    "FALLBACK_INSIGHTS",
]
