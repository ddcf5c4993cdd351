"""Tests for the fpdf2 invoice renderer."""

import re
import zlib
from datetime import datetime

import pytest

from swipelite.config.settings import PdfSettings
from swipelite.core.entities import Customer, LineItem, PaperFormat
from swipelite.core.exceptions import RenderError
from swipelite.core.services.document import assemble_document
from swipelite.infrastructure.pdf import Fpdf2InvoiceRenderer, hex_to_rgb
from swipelite.infrastructure.pdf.invoice_renderer import _safe_text

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Decompress FlateDecode streams in *pdf_bytes* and return all text."""
    texts = [pdf_bytes.decode("latin-1")]
    for match in re.finditer(rb"stream\r?\n(.*?)\r?\nendstream", pdf_bytes, re.DOTALL):
        try:
            texts.append(zlib.decompress(match.group(1)).decode("latin-1", errors="replace"))
        except zlib.error:
            pass
    return "\n".join(texts)


def _media_box(pdf_bytes: bytes) -> tuple[float, float]:
    """Width and height of the first page, in points."""
    match = re.search(rb"/MediaBox\s*\[\s*0\s+0\s+([\d.]+)\s+([\d.]+)\s*\]", pdf_bytes)
    assert match is not None
    return float(match.group(1)), float(match.group(2))


def _mm(points: float) -> float:
    return points * 25.4 / 72


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pdf_settings() -> PdfSettings:
    return PdfSettings(footer_text="Thank you for your business")


@pytest.fixture
def renderer(pdf_settings) -> Fpdf2InvoiceRenderer:
    return Fpdf2InvoiceRenderer(pdf_settings)


@pytest.fixture
def make_document(profile, customer, template, sample_items):
    def _make(**overrides):
        kwargs = dict(
            profile=profile,
            customer=customer,
            template=template,
            items=sample_items,
            custom_field_data={"f1": "HR26 AB 1234"},
            invoice_number="INV-123456",
            date=datetime(2024, 3, 5),
        )
        kwargs.update(overrides)
        return assemble_document(**kwargs)

    return _make


def _with_paper(template, paper: PaperFormat):
    return template.model_copy(update={"paper_format": paper})


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFpdf2InvoiceRenderer:
    """Tests for Fpdf2InvoiceRenderer."""

    def test_returns_pdf_bytes(self, renderer, make_document):
        output = renderer.render(make_document())
        assert isinstance(output, bytes)
        assert output.startswith(b"%PDF")

    def test_contains_invoice_text(self, renderer, make_document):
        text = _extract_pdf_text(renderer.render(make_document()))
        assert "INV-123456" in text
        assert "Main Business Hub" in text
        assert "John Doe" in text
        assert "HR26 AB 1234" in text

    @pytest.mark.parametrize(
        "paper,size",
        [
            (PaperFormat.A4, (210.0, 297.0)),
            (PaperFormat.A5, (148.0, 210.0)),
            (PaperFormat.LEGAL, (215.9, 355.6)),
            (PaperFormat.LETTER, (215.9, 279.4)),
        ],
    )
    def test_page_size(self, renderer, make_document, template, paper, size):
        output = renderer.render(make_document(template=_with_paper(template, paper)))
        width, height = _media_box(output)
        assert _mm(width) == pytest.approx(size[0], abs=0.5)
        assert _mm(height) == pytest.approx(size[1], abs=0.5)

    def test_thermal_roll(self, renderer, make_document, template):
        document = make_document(template=_with_paper(template, PaperFormat.THERMAL))
        output = renderer.render(document)
        width, height = _media_box(output)
        assert _mm(width) == pytest.approx(80.0, abs=0.5)
        assert _mm(height) == pytest.approx(renderer.thermal_height_mm(document), abs=0.5)

    def test_thermal_grows_with_items(self, renderer, make_document, template):
        thermal = _with_paper(template, PaperFormat.THERMAL)
        few = make_document(template=thermal)
        many = make_document(
            template=thermal,
            items=[LineItem(product_id=str(n), name=f"Item {n}", price=10) for n in range(20)],
        )
        assert renderer.thermal_height_mm(many) > renderer.thermal_height_mm(few)

    def test_thermal_fits_wrapped_text(self, renderer, make_document, template, profile):
        thermal = _with_paper(template, PaperFormat.THERMAL)
        short = make_document(template=thermal)
        long_address = profile.model_copy(
            update={"address": "Shop 12, Ground Floor, Galleria Market, " * 8}
        )
        long_value = "Deliver to the rear gate of the warehouse after 6 pm " * 4
        wrapped = make_document(
            template=thermal,
            profile=long_address,
            custom_field_data={"f1": "HR26 AB 1234", "f3": long_value},
        )

        assert renderer.thermal_height_mm(wrapped) > renderer.thermal_height_mm(short) + 10

        output = renderer.render(wrapped)
        _, height = _media_box(output)
        assert _mm(height) == pytest.approx(renderer.thermal_height_mm(wrapped), abs=0.5)
        assert "HDFC 1234" in _extract_pdf_text(output)

    def test_placeholder_renders(self, renderer, make_document):
        # Empty editable fields print an em dash, which core fonts cannot encode.
        output = renderer.render(make_document(custom_field_data={}))
        assert output.startswith(b"%PDF")

    def test_missing_customer(self, renderer, make_document):
        text = _extract_pdf_text(renderer.render(make_document(customer=None)))
        assert "Customer not selected" in text

    def test_no_items(self, renderer, make_document):
        text = _extract_pdf_text(renderer.render(make_document(items=[])))
        assert "No items added" in text

    def test_dynamic_values_listed(self, renderer, make_document):
        items = [
            LineItem(
                product_id="3",
                name="Smartphone X",
                price=15000,
                dynamic_values={"IMEI": "356938035643809"},
            )
        ]
        text = _extract_pdf_text(renderer.render(make_document(items=items)))
        assert "356938035643809" in text

    def test_non_latin_text_does_not_fail(self, renderer, make_document):
        customer = Customer(id="c2", name="राहुल ₹ Traders")
        output = renderer.render(make_document(customer=customer))
        assert output.startswith(b"%PDF")

    def test_default_settings(self, make_document):
        output = Fpdf2InvoiceRenderer().render(make_document())
        assert output.startswith(b"%PDF")

    def test_fpdf_error_wrapped(self, renderer, make_document, monkeypatch):
        from fpdf.errors import FPDFException

        def boom(self, *args, **kwargs):
            raise FPDFException("broken")

        monkeypatch.setattr(Fpdf2InvoiceRenderer, "_render_header", boom)
        with pytest.raises(RenderError) as exc_info:
            renderer.render(make_document())
        assert exc_info.value.details["target"] == "pdf"


class TestHelpers:
    """Tests for renderer helpers."""

    @pytest.mark.parametrize(
        "color,rgb",
        [
            ("#4f46e5", (79, 70, 229)),
            ("10b981", (16, 185, 129)),
            ("#FFFFFF", (255, 255, 255)),
            ("red", (0, 0, 0)),
            ("#fff", (0, 0, 0)),
        ],
    )
    def test_hex_to_rgb(self, color, rgb):
        assert hex_to_rgb(color) == rgb

    def test_safe_text(self):
        assert _safe_text("—") == "-"
        assert _safe_text("₹100") == "Rs.100"
        assert _safe_text("Café") == "Café"
        assert _safe_text("राहुल") == "?????"
