"""Expense domain service.

Expenses are owned by the expense workflow; reconciliation only needs to
look them up and read their total. This service covers just enough of the
workflow to create, list and approve them.
"""

from decimal import Decimal
from typing import Optional

from ledgerlink.database.base import Database
from ledgerlink.domain.entities import Expense as ExpenseEntity, ExpenseStatus
from ledgerlink.domain.errors import NotFoundError, ValidationError, expense_not_found, organization_not_found


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: Database):
        self.db = db

    def create_expense(self, organization_id: int, description: str, total_amount: Decimal) -> int:
        """Create a pending expense.

        Raises:
            NotFoundError: If the organization doesn't exist
            ValidationError: If the amount is not positive or description is empty
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        description = description.strip()
        if not description:
            raise ValidationError("Description is required")
        if total_amount <= 0:
            raise ValidationError("Amount must be positive")

        return self.db.create_expense(
            organization_id=organization_id,
            description=description,
            total_amount=total_amount,
        )

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        return self.db.get_expense(expense_id)

    def get_organization_expense(self, organization_id: int, expense_id: int) -> ExpenseEntity:
        """Get an expense owned by the organization.

        Raises:
            NotFoundError: If the expense doesn't exist or belongs elsewhere
        """
        expense = self.db.get_expense(expense_id)
        if expense is None or expense.organization_id != organization_id:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

    def list_expenses(self, organization_id: int) -> list[ExpenseEntity]:
        return self.db.list_expenses(organization_id)

    def approve(self, organization_id: int, expense_id: int) -> None:
        self.get_organization_expense(organization_id, expense_id)
        self.db.update_expense_status(expense_id, ExpenseStatus.APPROVED)

    def reject(self, organization_id: int, expense_id: int) -> None:
        self.get_organization_expense(organization_id, expense_id)
        self.db.update_expense_status(expense_id, ExpenseStatus.REJECTED)
