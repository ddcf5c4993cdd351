"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from swipelite.application.state import AppState
from swipelite.config import reset_settings
from swipelite.core.entities import (
    BaseStyle,
    BusinessProfile,
    Customer,
    CustomField,
    FieldPosition,
    Invoice,
    InvoiceStatus,
    InvoiceTemplate,
    LineItem,
    PaperFormat,
    Product,
    ProductDynamicField,
)
from swipelite.infrastructure.storage import CollectionRepository, InMemoryKeyValueStore


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate every test from the developer's environment and .env file."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def profile() -> BusinessProfile:
    return BusinessProfile(
        id="p1",
        name="Main Business Hub",
        address="Sector 44, Gurgaon",
        gstin="06AAAAA0000A1Z5",
        phone="0124-555666",
        email="contact@businesshub.com",
        is_default=True,
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(id="c1", name="John Doe", phone="9876543210", email="john@example.com")


@pytest.fixture
def coffee() -> Product:
    return Product(id="1", name="Premium Coffee Beans", price=450, sku="COF-001", stock=24)


@pytest.fixture
def honey() -> Product:
    return Product(id="2", name="Organic Honey 500g", price=320, sku="HON-002", stock=15)


@pytest.fixture
def phone_product() -> Product:
    """Product with one per-sale field and one fixed field."""
    return Product(
        id="3",
        name="Smartphone X",
        price=15000,
        sku="PHN-003",
        dynamic_fields=[
            ProductDynamicField(label="IMEI", is_dynamic=True),
            ProductDynamicField(label="Warranty", default_value="1 year", is_dynamic=False),
        ],
    )


@pytest.fixture
def template() -> InvoiceTemplate:
    """Custom template with one field in each region."""
    return InvoiceTemplate(
        id="t1",
        name="Shop Template",
        base_style=BaseStyle.MODERN,
        paper_format=PaperFormat.A5,
        accent_color="#10b981",
        custom_fields=[
            CustomField(id="f1", label="Vehicle No", position=FieldPosition.HEADER),
            CustomField(
                id="f2",
                label="Bank",
                default_value="HDFC 1234",
                is_editable=False,
                position=FieldPosition.FOOTER,
            ),
            CustomField(id="f3", label="PO Number", position=FieldPosition.ABOVE_ITEMS),
            CustomField(
                id="f4",
                label="Terms",
                default_value="Goods once sold are not returned",
                is_editable=False,
                position=FieldPosition.BELOW_ITEMS,
            ),
        ],
    )


@pytest.fixture
def sample_items() -> list[LineItem]:
    return [
        LineItem(product_id="1", name="Premium Coffee Beans", price=450, quantity=2),
        LineItem(product_id="2", name="Organic Honey 500g", price=320, quantity=1),
    ]


@pytest.fixture
def sample_invoice(sample_items) -> Invoice:
    return Invoice(
        id="inv1",
        invoice_number="INV-123456",
        date=datetime(2024, 3, 5, 10, 30),
        customer_id="c1",
        items=sample_items,
        subtotal=1220,
        tax_total=219.6,
        grand_total=1439.6,
        status=InvoiceStatus.UNPAID,
        profile_id="p1",
        template_id="default",
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(kv_store) -> CollectionRepository:
    return CollectionRepository(kv_store)


@pytest.fixture
async def state(repository) -> AppState:
    """State hydrated from an empty store, i.e. the seed data."""
    return await AppState.load(repository)
