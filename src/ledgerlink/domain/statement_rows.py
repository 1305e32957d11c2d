"""Validation of parsed statement rows into typed statement lines."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from ledgerlink.domain.errors import (
    DESCRIPTION_REQUIRED,
    INVALID_AMOUNT_FORMAT,
    INVALID_DATE_FORMAT,
    ValidationError,
)
from ledgerlink.domain.statement_csv import DEFAULT_COLUMNS, StatementColumns
from ledgerlink.utils.amount_parser import parse_statement_amount
from ledgerlink.utils.date_parser import is_statement_date, parse_french_date

# Line 1 of the file is the header row
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class RawStatementRow:
    """Untyped statement row as read from the CSV file."""

    row_num: int
    date: str
    value_date: str
    amount: str
    description: str
    balance: str

    @classmethod
    def from_mapping(
        cls, row_num: int, row: Mapping[str, str], columns: StatementColumns = DEFAULT_COLUMNS
    ) -> "RawStatementRow":
        return cls(
            row_num=row_num,
            date=row.get(columns.date, ""),
            value_date=row.get(columns.value_date, ""),
            amount=row.get(columns.amount, ""),
            description=row.get(columns.description, ""),
            balance=row.get(columns.balance, ""),
        )


@dataclass(frozen=True)
class StatementLine:
    """Validated statement row with typed values."""

    date: date
    value_date: date
    amount: Decimal
    description: str
    balance: Decimal


@dataclass(frozen=True)
class RowIssue:
    """One problem found in one row."""

    row_num: int
    field: str
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_num}: {self.field}: {self.message}"


@dataclass(frozen=True)
class RowValidation:
    """Outcome of validating a single row: either a line or a list of issues."""

    line: Optional[StatementLine] = None
    issues: list[RowIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.line is not None and not self.issues


def _check_date(raw: RawStatementRow, field_name: str, issues: list[RowIssue]) -> Optional[date]:
    value = getattr(raw, field_name).strip()
    if not is_statement_date(value):
        issues.append(RowIssue(raw.row_num, field_name, INVALID_DATE_FORMAT))
        return None
    try:
        return parse_french_date(value)
    except ValueError:
        # Right shape, impossible day such as 31/02/2025
        issues.append(RowIssue(raw.row_num, field_name, INVALID_DATE_FORMAT))
        return None


def _check_amount(raw: RawStatementRow, field_name: str, issues: list[RowIssue]) -> Optional[Decimal]:
    try:
        return parse_statement_amount(getattr(raw, field_name))
    except ValueError:
        issues.append(RowIssue(raw.row_num, field_name, INVALID_AMOUNT_FORMAT))
        return None


def validate_row(raw: RawStatementRow) -> RowValidation:
    """Validate and convert one raw statement row."""
    issues: list[RowIssue] = []

    txn_date = _check_date(raw, "date", issues)
    value_date = _check_date(raw, "value_date", issues)
    amount = _check_amount(raw, "amount", issues)
    balance = _check_amount(raw, "balance", issues)

    description = raw.description.strip()
    if not description:
        issues.append(RowIssue(raw.row_num, "description", DESCRIPTION_REQUIRED))

    if issues:
        return RowValidation(issues=issues)

    return RowValidation(
        line=StatementLine(
            date=txn_date,
            value_date=value_date,
            amount=amount,
            description=description,
            balance=balance,
        )
    )


def validate_rows(raw_rows: Iterable[RawStatementRow]) -> list[StatementLine]:
    """Validate a whole statement.

    All rows are checked before anything is rejected, so the error carries
    every problem in the file.

    Raises:
        ValidationError: With ``details`` listing every RowIssue, if any row fails
    """
    lines: list[StatementLine] = []
    issues: list[RowIssue] = []

    for raw in raw_rows:
        result = validate_row(raw)
        if result.ok:
            lines.append(result.line)
        else:
            issues.extend(result.issues)

    if issues:
        raise ValidationError("Invalid CSV data", details=issues)

    return lines
