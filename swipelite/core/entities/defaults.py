"""
Seed records.

Used when a collection has never been stored, or when the stored value
cannot be decoded.
"""

from swipelite.core.entities.catalog import Customer, Product
from swipelite.core.entities.profile import BusinessProfile
from swipelite.core.entities.template import (
    BUILTIN_TEMPLATE_ID,
    BaseStyle,
    InvoiceTemplate,
    PaperFormat,
)


def builtin_template() -> InvoiceTemplate:
    """The reserved, non-editable template."""
    return InvoiceTemplate(
        id=BUILTIN_TEMPLATE_ID,
        name="Standard Tally",
        base_style=BaseStyle.TALLY,
        paper_format=PaperFormat.A4,
        accent_color="#4f46e5",
        custom_fields=[],
        is_default=True,
    )


def seed_profiles() -> list[BusinessProfile]:
    return [
        BusinessProfile(
            id="p1",
            name="Main Business Hub",
            address="Sector 44, Gurgaon, HR 122003",
            gstin="06AAAAA0000A1Z5",
            phone="0124-555666",
            email="contact@businesshub.com",
            is_default=True,
        )
    ]


def seed_products() -> list[Product]:
    return [
        Product(
            id="1",
            name="Premium Coffee Beans",
            price=450,
            sku="COF-001",
            stock=24,
            category="Beverages",
        ),
        Product(
            id="2",
            name="Organic Honey 500g",
            price=320,
            sku="HON-002",
            stock=15,
            category="Food",
        ),
    ]


def seed_customers() -> list[Customer]:
    return [
        Customer(
            id="c1",
            name="John Doe",
            phone="9876543210",
            email="john@example.com",
            address="123 Baker St, London",
        )
    ]


def seed_templates() -> list[InvoiceTemplate]:
    return [builtin_template()]
