"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

STATEMENT_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_statement_date(date_str: str) -> bool:
    """Return True if the string has the DD/MM/YYYY shape used by bank exports."""
    return bool(STATEMENT_DATE_PATTERN.match(date_str))


def parse_french_date(date_str: str) -> date:
    """Parse a DD/MM/YYYY statement date.

    Components are read positionally as day, month, year.

    Args:
        date_str: Date string such as "13/08/2025"

    Returns:
        Date object

    Raises:
        ValueError: If the string is not DD/MM/YYYY or is not a real calendar date
    """
    date_str = date_str.strip()
    if not is_statement_date(date_str):
        raise ValueError(f"Could not parse date '{date_str}': expected DD/MM/YYYY")

    day, month, year = date_str.split("/")
    return date(int(year), int(month), int(day))


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date string into a date object.

    Used for CLI filters. Supports:
    - Absolute dates: "2024-01-15", "15/01/2024" (day first), "January 15, 2024"
    - Relative dates: "today", "yesterday", "this month", "last month",
      "this year", "last year"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if is_statement_date(date_str):
        return parse_french_date(date_str)

    # dayfirst would read 2025-09-01 as January 9th
    if ISO_DATE_PATTERN.match(date_str):
        return date.fromisoformat(date_str)

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
