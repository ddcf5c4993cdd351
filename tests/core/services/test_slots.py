"""Tests for template slot resolution."""

from swipelite.core.entities import CustomField, FieldPosition, InvoiceTemplate
from swipelite.core.services.slots import (
    PLACEHOLDER,
    ResolvedSlots,
    editable_fields,
    resolve_slots,
)


class TestResolveSlots:
    """Tests for resolve_slots."""

    def test_fields_partitioned_by_region(self, template):
        slots = resolve_slots(template, {"f1": "HR26 AB 1234", "f3": "PO-77"})
        assert [f.field_id for f in slots.header] == ["f1"]
        assert [f.field_id for f in slots.footer] == ["f2"]
        assert [f.field_id for f in slots.above_items] == ["f3"]
        assert [f.field_id for f in slots.below_items] == ["f4"]

    def test_editable_uses_submitted_value(self, template):
        slots = resolve_slots(template, {"f1": "HR26 AB 1234"})
        header = slots.header[0]
        assert header.value == "HR26 AB 1234"
        assert header.is_editable
        assert not header.is_placeholder

    def test_missing_editable_value_is_placeholder(self, template):
        slots = resolve_slots(template, {})
        assert slots.header[0].value == PLACEHOLDER
        assert slots.header[0].is_placeholder

    def test_blank_editable_value_is_placeholder(self, template):
        slots = resolve_slots(template, {"f1": "   "})
        assert slots.header[0].value == PLACEHOLDER

    def test_placeholder_is_em_dash(self):
        assert PLACEHOLDER == "—"

    def test_fixed_field_ignores_submitted_value(self, template):
        slots = resolve_slots(template, {"f2": "Someone else's bank"})
        assert slots.footer[0].value == "HDFC 1234"
        assert not slots.footer[0].is_editable

    def test_unknown_keys_ignored(self, template):
        slots = resolve_slots(template, {"zzz": "stray"})
        assert all(f.field_id != "zzz" for f in slots.all())
        assert len(slots.all()) == 4

    def test_none_values(self, template):
        slots = resolve_slots(template, None)
        assert len(slots.all()) == 4

    def test_template_order_within_region(self):
        template = InvoiceTemplate(
            id="t",
            name="T",
            custom_fields=[
                CustomField(id="b", label="B", position=FieldPosition.FOOTER),
                CustomField(id="a", label="A", position=FieldPosition.FOOTER),
                CustomField(id="c", label="C", position=FieldPosition.FOOTER),
            ],
        )
        slots = resolve_slots(template)
        assert [f.label for f in slots.footer] == ["B", "A", "C"]

    def test_no_fields(self):
        slots = resolve_slots(InvoiceTemplate(id="t", name="T"), {"x": "y"})
        assert slots == ResolvedSlots()
        assert slots.all() == []

    def test_all_orders_regions_top_to_bottom(self, template):
        slots = resolve_slots(template)
        assert [f.field_id for f in slots.all()] == ["f1", "f3", "f4", "f2"]

    def test_region_lookup(self, template):
        slots = resolve_slots(template)
        assert slots.region(FieldPosition.BELOW_ITEMS) is slots.below_items


class TestEditableFields:
    """Tests for editable_fields."""

    def test_only_editable(self, template):
        assert [f.id for f in editable_fields(template)] == ["f1", "f3"]
