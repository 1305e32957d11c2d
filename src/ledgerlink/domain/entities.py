"""Domain model entities for ledgerlink.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class ExpenseStatus(str, Enum):
    """Approval status of an expense."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ActivityType(str, Enum):
    """Kinds of audit log entries written by reconciliation operations."""

    BANK_TRANSACTIONS_IMPORTED = "BANK_TRANSACTIONS_IMPORTED"
    BANK_TRANSACTION_HASHES_RECOMPUTED = "BANK_TRANSACTION_HASHES_RECOMPUTED"
    BANK_TRANSACTION_EXPENSE_ASSOCIATED = "BANK_TRANSACTION_EXPENSE_ASSOCIATED"
    BANK_TRANSACTION_EXPENSE_DISSOCIATED = "BANK_TRANSACTION_EXPENSE_DISSOCIATED"


class ReconciliationState(str, Enum):
    """Display state of a bank transaction with respect to its links."""

    INELIGIBLE = "INELIGIBLE"
    UNMATCHED = "UNMATCHED"
    PARTIAL = "PARTIAL"
    FULL = "FULL"


@dataclass(frozen=True)
class Organization:
    """Organization (charity/association) domain entity."""

    id: int
    name: str
    slug: str
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity.

    ``total_amount`` is the total including tax (TTC).
    """

    id: int
    organization_id: int
    description: str
    total_amount: Decimal
    status: ExpenseStatus
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Bank statement line domain entity."""

    id: int
    fingerprint: str
    organization_id: int
    date: date
    value_date: date
    amount: Decimal
    description: str
    balance: Decimal
    created_at: datetime

    @property
    def is_debit(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class Link:
    """Partial allocation of a bank transaction's amount to an expense."""

    id: int
    transaction_id: int
    expense_id: int
    amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Activity:
    """Audit log entry."""

    id: int
    organization_id: int
    activity_type: ActivityType
    entity_type: Optional[str]
    entity_id: Optional[int]
    description: str
    metadata: dict[str, Any]
    created_at: datetime


@dataclass(frozen=True)
class TransactionReconciliation:
    """Read-only reconciliation view of one bank transaction."""

    transaction: Transaction
    associated_amount: Decimal
    remaining_amount: Decimal
    state: ReconciliationState
    links: list[Link] = field(default_factory=list)


@dataclass(frozen=True)
class ImportSummary:
    """Result of importing one bank statement file."""

    imported_count: int
    skipped_count: int
    file_name: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "importedCount": self.imported_count,
            "skippedCount": self.skipped_count,
            "fileName": self.file_name,
        }


@dataclass(frozen=True)
class RecomputeSummary:
    """Result of recomputing fingerprints for an organization."""

    updated_count: int
    error_count: int
    total_transactions: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "updatedCount": self.updated_count,
            "errorCount": self.error_count,
            "totalTransactions": self.total_transactions,
        }
