"""Business profile entity."""

from swipelite.core.entities.base import Entity


class BusinessProfile(Entity):
    """The seller identity printed on invoices."""

    id: str
    name: str
    address: str = ""
    gstin: str = ""  # tax registration id
    phone: str = ""
    email: str = ""
    is_default: bool = False
