"""Utility functions for ledgerlink."""

from ledgerlink.utils.date_parser import parse_date, parse_french_date
from ledgerlink.utils.amount_parser import parse_amount, parse_statement_amount, format_amount_key

__all__ = [
    "parse_date",
    "parse_french_date",
    "parse_amount",
    "parse_statement_amount",
    "format_amount_key",
]
