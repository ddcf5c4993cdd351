"""Identifier and invoice number generation."""

import secrets
import string
import time

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(length: int = 9) -> str:
    """Random base-36 identifier for stored records."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_invoice_number(prefix: str = "INV-", now_ms: int | None = None) -> str:
    """
    Prefix plus the last six digits of a millisecond timestamp.

    Numbers are editable by the user and not guaranteed unique.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{prefix}{str(now_ms)[-6:]}"


def generate_sku(length: int = 6) -> str:
    """Stock-keeping code like ``SKU-4F7Q2A``."""
    alphabet = string.ascii_uppercase + string.digits
    return "SKU-" + "".join(secrets.choice(alphabet) for _ in range(length))
