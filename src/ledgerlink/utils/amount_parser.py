"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

STATEMENT_AMOUNT_PATTERN = re.compile(r"^[-+]?\d+(\.\d+)?$")

CENT = Decimal("0.01")


def is_statement_amount(amount_str: str) -> bool:
    """Return True for an optionally signed decimal numeral ("-12", "+3", "50.00")."""
    return bool(STATEMENT_AMOUNT_PATTERN.match(amount_str))


def parse_statement_amount(amount_str: str) -> Decimal:
    """Parse a statement amount or balance into a Decimal.

    Only plain numerals are accepted: an optional sign, digits and an
    optional fractional part. Negative values are debits. The result is
    rounded to cents, the precision both stored and fingerprinted.

    Raises:
        ValueError: If the string is not a plain decimal numeral
    """
    amount_str = amount_str.strip()
    if not is_statement_amount(amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    try:
        return Decimal(amount_str).quantize(CENT)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range '{amount_str}': {e!r}")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount ("12.5", "12,50", "€12.50") into a Decimal.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£\s]", "", amount_str)
    if "." in cleaned:
        cleaned = cleaned.replace(",", "")
    elif cleaned.count(",") == 1:
        cleaned = cleaned.replace(",", ".")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def format_amount_key(amount: Decimal) -> str:
    """Canonical two-decimal string of an amount ("50" -> "50.00")."""
    return str(Decimal(amount).quantize(CENT))
