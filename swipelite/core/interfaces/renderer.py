"""Abstract interfaces for invoice document output channels."""

from abc import ABC, abstractmethod

from swipelite.core.services.document import InvoiceDocument


class IPdfRenderer(ABC):
    """Rasterizes an invoice document to PDF."""

    @abstractmethod
    def render(self, document: InvoiceDocument) -> bytes:
        """Render *document* into PDF bytes."""
        ...


class IPrintRenderer(ABC):
    """Produces printable markup sized to the document's paper format."""

    @abstractmethod
    def render(self, document: InvoiceDocument, scale: float = 1.0) -> str:
        """Render *document* as a standalone printable page."""
        ...
