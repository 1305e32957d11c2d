"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Any, Optional, Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only care about "bad input".
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``details`` carries structured per-row problems when a whole batch is
    rejected.
    """

    def __init__(self, message: str, details: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.details = list(details or [])


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AssociationError(ValidationError):
    """Rejection of a single association attempt."""


class IneligibleTransactionError(AssociationError):
    """Only debit transactions can be associated with expenses."""


class DuplicateAssociationError(AssociationError, ConflictError):
    """An association already exists for this transaction and expense."""


class AmountExceedsRemainingError(AssociationError):
    """Association would over-allocate the transaction."""

    def __init__(self, remaining: Decimal):
        super().__init__(amount_exceeds_remaining(remaining))
        self.remaining = remaining


class AmountExceedsExpenseError(AssociationError):
    """Association amount is larger than the expense total."""

    def __init__(self, expense_total: Decimal):
        super().__init__(amount_exceeds_expense(expense_total))
        self.expense_total = expense_total


INVALID_AMOUNT_FORMAT = "Invalid amount format"
INVALID_DATE_FORMAT = "Invalid date format (expected DD/MM/YYYY)"
DESCRIPTION_REQUIRED = "Description is required"
NO_DATA_FOUND = "No data found in CSV"


def organization_not_found(organization: Any) -> str:
    """Return message for missing organization."""
    return f"Organization {organization} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing bank transaction."""
    return f"Bank transaction {transaction_id} not found"


def association_not_found(link_id: int) -> str:
    """Return message for missing association."""
    return f"Association {link_id} not found"


def missing_columns(columns: Sequence[str]) -> str:
    """Return message for a statement missing required headers."""
    return f"CSV must contain columns: {', '.join(columns)}"


def duplicate_association(transaction_id: int, expense_id: int) -> str:
    """Return message for an already linked transaction/expense pair."""
    return f"Expense {expense_id} is already associated with transaction {transaction_id}"


def amount_exceeds_remaining(remaining: Decimal) -> str:
    """Return message reporting the transaction's remaining headroom."""
    return f"Amount exceeds remaining transaction amount ({remaining})"


def amount_exceeds_expense(expense_total: Decimal) -> str:
    """Return message reporting the expense total."""
    return f"Amount exceeds expense amount ({expense_total})"


def ineligible_transaction(transaction_id: int) -> str:
    """Return message for a credit transaction offered for association."""
    return (
        f"Bank transaction {transaction_id} is a credit; "
        "only debit transactions can be associated with expenses"
    )
