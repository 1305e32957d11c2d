"""Association ledger: links between bank transactions and expenses.

A link allocates part of a debit transaction to an expense. For a
transaction, the sum of its link amounts never exceeds the absolute value of
the transaction amount. A single link never exceeds the expense total, and a
given transaction/expense pair is linked at most once.

The expense-side check compares a new link against the expense *total*, not
against what remains of it after links on other transactions. The
cross-transaction remaining amount is available via ``expense_remaining`` for
display only.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from ledgerlink.database.base import Database
from ledgerlink.domain.activity import ActivityService
from ledgerlink.domain.entities import (
    ActivityType,
    Expense,
    Link,
    ReconciliationState,
    Transaction,
    TransactionReconciliation,
)
from ledgerlink.domain.errors import (
    AmountExceedsExpenseError,
    AmountExceedsRemainingError,
    ConflictError,
    DuplicateAssociationError,
    IneligibleTransactionError,
    NotFoundError,
    ValidationError,
    association_not_found,
    duplicate_association,
    expense_not_found,
    ineligible_transaction,
    transaction_not_found,
)

logger = structlog.get_logger(__name__)

# Remaining amounts below this are displayed as fully reconciled
RECONCILED_TOLERANCE = Decimal("0.01")


class AssociationService:
    """Service for associating bank transactions with expenses."""

    def __init__(self, db: Database):
        """Initialize association service.

        Args:
            db: Database instance
        """
        self.db = db
        self.activity_service = ActivityService(db)

    # Lookups scoped to an organization
    def get_organization_transaction(self, organization_id: int, transaction_id: int) -> Transaction:
        """Get a bank transaction owned by the organization.

        Raises:
            NotFoundError: If the transaction doesn't exist or belongs elsewhere
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None or transaction.organization_id != organization_id:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def _get_organization_expense(self, organization_id: int, expense_id: int) -> Expense:
        expense = self.db.get_expense(expense_id)
        if expense is None or expense.organization_id != organization_id:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

    def list_transactions(
        self,
        organization_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionReconciliation]:
        """List an organization's transactions with their reconciliation status, newest first."""
        transactions = self.db.list_transactions(
            organization_id, start_date=start_date, end_date=end_date
        )
        return [self.transaction_status(txn) for txn in transactions]

    # Writes
    def associate(
        self,
        organization_id: int,
        transaction_id: int,
        expense_id: int,
        amount: Decimal,
    ) -> Link:
        """Allocate part of a debit transaction to an expense.

        Args:
            organization_id: Caller's organization
            transaction_id: Bank transaction to allocate from
            expense_id: Expense to allocate to
            amount: Positive amount to allocate

        Returns:
            The created Link

        Raises:
            NotFoundError: If the transaction or expense isn't in the organization
            IneligibleTransactionError: If the transaction is not a debit
            ValidationError: If amount is not positive
            DuplicateAssociationError: If the pair is already linked
            AmountExceedsRemainingError: If the transaction would be over-allocated
            AmountExceedsExpenseError: If amount is larger than the expense total
        """
        transaction = self.get_organization_transaction(organization_id, transaction_id)
        expense = self._get_organization_expense(organization_id, expense_id)

        if not transaction.is_debit:
            raise IneligibleTransactionError(ineligible_transaction(transaction_id))

        if amount <= 0:
            raise ValidationError("Amount must be positive")

        if self.db.get_link_for_pair(transaction_id, expense_id) is not None:
            raise DuplicateAssociationError(duplicate_association(transaction_id, expense_id))

        remaining = self.remaining_to_reconcile(transaction)
        if amount > remaining:
            raise AmountExceedsRemainingError(remaining)

        if amount > expense.total_amount:
            raise AmountExceedsExpenseError(expense.total_amount)

        try:
            link_id = self.db.create_link(transaction_id, expense_id, amount)
        except ConflictError as e:
            raise DuplicateAssociationError(duplicate_association(transaction_id, expense_id)) from e

        logger.info(
            "expense_associated",
            organization_id=organization_id,
            transaction_id=transaction_id,
            expense_id=expense_id,
            amount=str(amount),
        )

        self.activity_service.record(
            organization_id=organization_id,
            activity_type=ActivityType.BANK_TRANSACTION_EXPENSE_ASSOCIATED,
            entity_type="bank_transaction",
            entity_id=transaction_id,
            description=f'Associated expense "{expense.description}" with bank transaction',
            metadata={
                "bankTransactionId": transaction_id,
                "expenseId": expense_id,
                "amount": str(amount),
                "expenseDescription": expense.description,
            },
        )

        return self.db.get_link(link_id)

    def remove_association(self, organization_id: int, link_id: int) -> None:
        """Delete a link.

        Raises:
            NotFoundError: If the link doesn't exist or its transaction belongs elsewhere
        """
        link = self.db.get_link(link_id)
        if link is None:
            raise NotFoundError(association_not_found(link_id))

        transaction = self.db.get_transaction(link.transaction_id)
        if transaction is None or transaction.organization_id != organization_id:
            raise NotFoundError(association_not_found(link_id))

        self.db.delete_link(link_id)

        logger.info("association_removed", organization_id=organization_id, link_id=link_id)

        self.activity_service.record(
            organization_id=organization_id,
            activity_type=ActivityType.BANK_TRANSACTION_EXPENSE_DISSOCIATED,
            entity_type="bank_transaction",
            entity_id=link.transaction_id,
            description="Removed expense association from bank transaction",
            metadata={
                "bankTransactionId": link.transaction_id,
                "expenseId": link.expense_id,
                "amount": str(link.amount),
            },
        )

    # Derived amounts
    def associated_amount(self, transaction_id: int) -> Decimal:
        """Sum of the transaction's link amounts."""
        return sum(
            (link.amount for link in self.db.list_links_for_transaction(transaction_id)),
            Decimal("0"),
        )

    def remaining_to_reconcile(self, transaction: Transaction) -> Decimal:
        """Absolute transaction amount not yet allocated to expenses."""
        return abs(transaction.amount) - self.associated_amount(transaction.id)

    def expense_remaining(self, expense: Expense) -> Decimal:
        """Expense total not yet covered by links on any transaction."""
        associated = sum(
            (link.amount for link in self.db.list_links_for_expense(expense.id)),
            Decimal("0"),
        )
        return expense.total_amount - associated

    def suggested_amount(self, transaction: Transaction, expense: Expense) -> Decimal:
        """Default amount to pre-fill when linking an expense to a transaction."""
        return min(expense.total_amount, self.remaining_to_reconcile(transaction))

    def reconciliation_state(self, transaction: Transaction) -> ReconciliationState:
        """Classify a transaction as unmatched, partially or fully reconciled."""
        return self.transaction_status(transaction).state

    def transaction_status(self, transaction: Transaction) -> TransactionReconciliation:
        """Full reconciliation view of a transaction."""
        links = self.db.list_links_for_transaction(transaction.id)
        associated = sum((link.amount for link in links), Decimal("0"))
        remaining = abs(transaction.amount) - associated

        if not transaction.is_debit:
            state = ReconciliationState.INELIGIBLE
        elif abs(remaining) < RECONCILED_TOLERANCE:
            state = ReconciliationState.FULL
        elif associated > 0:
            state = ReconciliationState.PARTIAL
        else:
            state = ReconciliationState.UNMATCHED

        return TransactionReconciliation(
            transaction=transaction,
            associated_amount=associated,
            remaining_amount=remaining,
            state=state,
            links=links,
        )
