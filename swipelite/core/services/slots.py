"""Template slot resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from swipelite.config import get_logger
from swipelite.core.entities.template import (
    CustomField,
    FieldPosition,
    InvoiceTemplate,
)

logger = get_logger(__name__)

PLACEHOLDER = "—"


@dataclass(frozen=True)
class ResolvedField:
    """A custom field with the value that will be printed."""

    field_id: str
    label: str
    value: str
    is_editable: bool
    is_placeholder: bool = False


@dataclass
class ResolvedSlots:
    """Resolved custom fields grouped by sheet region, in template order."""

    header: list[ResolvedField] = field(default_factory=list)
    footer: list[ResolvedField] = field(default_factory=list)
    above_items: list[ResolvedField] = field(default_factory=list)
    below_items: list[ResolvedField] = field(default_factory=list)

    def region(self, position: FieldPosition) -> list[ResolvedField]:
        return {
            FieldPosition.HEADER: self.header,
            FieldPosition.FOOTER: self.footer,
            FieldPosition.ABOVE_ITEMS: self.above_items,
            FieldPosition.BELOW_ITEMS: self.below_items,
        }[position]

    def all(self) -> list[ResolvedField]:
        return self.header + self.above_items + self.below_items + self.footer


def resolve_field(custom_field: CustomField, submitted: Mapping[str, str]) -> ResolvedField:
    """Resolve one field against the values entered for an invoice."""
    if not custom_field.is_editable:
        return ResolvedField(
            field_id=custom_field.id,
            label=custom_field.label,
            value=custom_field.default_value,
            is_editable=False,
        )

    value = submitted.get(custom_field.id)
    if value is None or not value.strip():
        return ResolvedField(
            field_id=custom_field.id,
            label=custom_field.label,
            value=PLACEHOLDER,
            is_editable=True,
            is_placeholder=True,
        )
    return ResolvedField(
        field_id=custom_field.id,
        label=custom_field.label,
        value=value,
        is_editable=True,
    )


def resolve_slots(
    template: InvoiceTemplate,
    submitted_values: Mapping[str, str] | None = None,
) -> ResolvedSlots:
    """Resolve every custom field of *template*, partitioned by position."""
    submitted = submitted_values or {}

    unknown = set(submitted) - template.field_ids
    if unknown:
        logger.debug(
            "custom_field_values_ignored",
            template_id=template.id,
            field_ids=sorted(unknown),
        )

    slots = ResolvedSlots()
    for custom_field in template.custom_fields:
        slots.region(custom_field.position).append(resolve_field(custom_field, submitted))
    return slots


def editable_fields(template: InvoiceTemplate) -> list[CustomField]:
    """Fields whose value is entered per invoice."""
    return [f for f in template.custom_fields if f.is_editable]
