"""
Application layer - state, invoice composition and use cases.

This layer orchestrates business logic by:
1. Holding entity collections with write-through persistence
2. Composing invoices from products, customers and templates
3. Implementing use cases that coordinate exporters and the LLM parser
"""

from swipelite.application.invoice_composer import InvoiceComposer
from swipelite.application.services import open_state
from swipelite.application.state import AppState
from swipelite.application.use_cases import (
    BusinessInsightsUseCase,
    ExportPdfUseCase,
    ExportTallyUseCase,
    ParseSmartBillUseCase,
    PrintInvoiceUseCase,
    SaveInvoiceUseCase,
)

__all__ = [
    "AppState",
    "InvoiceComposer",
    "open_state",
    # Use Cases
    "SaveInvoiceUseCase",
    "ExportTallyUseCase",
    "ExportPdfUseCase",
    "PrintInvoiceUseCase",
    "ParseSmartBillUseCase",
    "BusinessInsightsUseCase",
]
