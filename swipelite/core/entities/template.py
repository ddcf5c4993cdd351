"""
Invoice template entity.

A template picks the visual style, paper format and accent colour of an
invoice, and declares custom field slots placed in one of four regions.
"""

from enum import Enum

from pydantic import Field

from swipelite.core.entities.base import Entity

BUILTIN_TEMPLATE_ID = "default"


class BaseStyle(str, Enum):
    """Visual style of a template."""

    TALLY = "TALLY"
    MODERN = "MODERN"
    MINIMAL = "MINIMAL"


class PaperFormat(str, Enum):
    """Physical page an invoice is rendered for."""

    A4 = "A4"
    A5 = "A5"
    LEGAL = "LEGAL"
    LETTER = "LETTER"
    THERMAL = "THERMAL"

    @property
    def size_mm(self) -> tuple[float, float | None]:
        """(width, height) in millimetres; thermal rolls have no fixed height."""
        return _PAPER_SIZES_MM[self]

    @property
    def is_thermal(self) -> bool:
        return self is PaperFormat.THERMAL


_PAPER_SIZES_MM: dict[PaperFormat, tuple[float, float | None]] = {
    PaperFormat.A4: (210.0, 297.0),
    PaperFormat.A5: (148.0, 210.0),
    PaperFormat.LEGAL: (215.9, 355.6),
    PaperFormat.LETTER: (215.9, 279.4),
    PaperFormat.THERMAL: (80.0, None),
}


class FieldPosition(str, Enum):
    """Region of the invoice sheet a custom field is printed in."""

    HEADER = "HEADER"
    FOOTER = "FOOTER"
    ABOVE_ITEMS = "ABOVE_ITEMS"
    BELOW_ITEMS = "BELOW_ITEMS"


class CustomField(Entity):
    """A template slot, either fixed or filled in per invoice."""

    id: str
    label: str
    default_value: str = ""
    is_editable: bool = True
    position: FieldPosition = FieldPosition.HEADER


class InvoiceTemplate(Entity):
    """Layout definition used to render invoices."""

    id: str
    name: str
    base_style: BaseStyle = BaseStyle.TALLY
    paper_format: PaperFormat = PaperFormat.A4
    accent_color: str = "#4f46e5"
    custom_fields: list[CustomField] = Field(default_factory=list)
    is_default: bool = False

    @property
    def is_builtin(self) -> bool:
        """The reserved built-in template can only be selected, never changed."""
        return self.id == BUILTIN_TEMPLATE_ID

    @property
    def field_ids(self) -> set[str]:
        return {f.id for f in self.custom_fields}
