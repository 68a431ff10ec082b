"""
Human-readable code generators: SKUs, supplier codes, transaction numbers.
"""
import re
import secrets
import string
from datetime import datetime, timezone

TRANSACTION_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits

INVOICE_PREFIX = "INV"
PAYMENT_PREFIX = "PAY"


def _today() -> datetime:
    return datetime.now(timezone.utc)


def generate_sku(name: str) -> str:
    """
    SKU for a product without a supplier code.

    Format: ``<first three letters of the name>-<YYMMDD>-<4 random digits>``.
    """
    letters = re.sub(r"[^0-9A-Za-z]", "", name.strip())
    type_code = (letters[:3] or "PRD").upper()
    date_code = _today().strftime("%y%m%d")
    random_code = 1000 + secrets.randbelow(9000)
    return f"{type_code}-{date_code}-{random_code}"


def generate_supplier_code(count: int) -> str:
    """Supplier code from a running count, e.g. ``SUP-007``."""
    return f"SUP-{count:03d}"


def generate_product_code_for_supplier(supplier_code: str, product_count: int) -> str:
    """SKU derived from the supplier code, e.g. ``SUP-007-012``."""
    return f"{supplier_code}-{product_count:03d}"


def generate_transaction_number(prefix: str = INVOICE_PREFIX) -> str:
    """
    Transaction number ``<prefix>-YYYYMMDD-XXXXXX``.

    Invoices use ``INV`` and debt collections ``PAY``; the date is UTC and the
    suffix is six random upper-case alphanumerics.
    """
    suffix = "".join(secrets.choice(TRANSACTION_SUFFIX_ALPHABET) for _ in range(6))
    return f"{prefix}-{_today().strftime('%Y%m%d')}-{suffix}"
