"""Deduplication fingerprints for bank transactions."""

import hashlib
from datetime import date
from decimal import Decimal

from ledgerlink.utils.amount_parser import format_amount_key

FIELD_SEPARATOR = "-"


def generate_transaction_hash(
    date_key: str,
    amount: str,
    description: str,
    balance: str,
    organization_id: str,
) -> str:
    """Hash the five identifying fields of a statement line.

    Returns:
        64-character hexadecimal SHA-256 digest
    """
    data = FIELD_SEPARATOR.join([date_key, amount, description, balance, organization_id])
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def fingerprint_for(
    txn_date: date,
    amount: Decimal,
    description: str,
    balance: Decimal,
    organization_id: int,
) -> str:
    """Fingerprint of a typed transaction.

    This is the only place typed values are turned into hash inputs: ISO
    calendar date, two-decimal amount and balance, organization id as text.
    Import and recompute must both go through it.
    """
    return generate_transaction_hash(
        txn_date.isoformat(),
        format_amount_key(amount),
        description,
        format_amount_key(balance),
        str(organization_id),
    )
