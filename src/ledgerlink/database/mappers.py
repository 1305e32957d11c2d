"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so column names such as ``hash``
or ``amount_ttc`` never leak into the domain layer.
"""

from decimal import Decimal

from ledgerlink.domain import entities as domain
from ledgerlink.database.models import (
    Organization as ORMOrganization,
    Expense as ORMExpense,
    BankTransaction as ORMBankTransaction,
    BankTransactionExpense as ORMBankTransactionExpense,
    Activity as ORMActivity,
)


def _money(value) -> Decimal:
    """Normalize a stored numeric value to a two-decimal Decimal."""
    return Decimal(str(value)).quantize(Decimal("0.01"))


def organization_to_domain(orm_organization: ORMOrganization) -> domain.Organization:
    """Convert SQLAlchemy Organization model to domain Organization entity."""
    return domain.Organization(
        id=orm_organization.id,
        name=orm_organization.name,
        slug=orm_organization.slug,
        created_at=orm_organization.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        organization_id=orm_expense.organization_id,
        description=orm_expense.description,
        total_amount=_money(orm_expense.amount_ttc),
        status=domain.ExpenseStatus(orm_expense.status),
        created_at=orm_expense.created_at,
    )


def transaction_to_domain(orm_transaction: ORMBankTransaction) -> domain.Transaction:
    """Convert SQLAlchemy BankTransaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        fingerprint=orm_transaction.hash,
        organization_id=orm_transaction.organization_id,
        date=orm_transaction.date,
        value_date=orm_transaction.value_date,
        amount=_money(orm_transaction.amount),
        description=orm_transaction.description,
        balance=_money(orm_transaction.balance),
        created_at=orm_transaction.created_at,
    )


def link_to_domain(orm_link: ORMBankTransactionExpense) -> domain.Link:
    """Convert SQLAlchemy BankTransactionExpense model to domain Link entity."""
    return domain.Link(
        id=orm_link.id,
        transaction_id=orm_link.bank_transaction_id,
        expense_id=orm_link.expense_id,
        amount=_money(orm_link.amount),
        created_at=orm_link.created_at,
    )


def activity_to_domain(orm_activity: ORMActivity) -> domain.Activity:
    """Convert SQLAlchemy Activity model to domain Activity entity."""
    return domain.Activity(
        id=orm_activity.id,
        organization_id=orm_activity.organization_id,
        activity_type=domain.ActivityType(orm_activity.type),
        entity_type=orm_activity.entity_type,
        entity_id=orm_activity.entity_id,
        description=orm_activity.description,
        metadata=dict(orm_activity.details or {}),
        created_at=orm_activity.created_at,
    )
