"""Tests for expense domain service."""

from decimal import Decimal

import pytest

from ledgerlink.domain.entities import ExpenseStatus
from ledgerlink.domain.errors import NotFoundError, ValidationError


def test_create_expense(expense_service, sample_organization):
    expense_id = expense_service.create_expense(sample_organization.id, " Printer paper ", Decimal("42.9"))

    expense = expense_service.get_expense(expense_id)
    assert expense.description == "Printer paper"
    assert expense.total_amount == Decimal("42.90")
    assert expense.status == ExpenseStatus.PENDING
    assert expense.organization_id == sample_organization.id


def test_create_expense_unknown_organization(expense_service):
    with pytest.raises(NotFoundError):
        expense_service.create_expense(999, "Paper", Decimal("1"))


@pytest.mark.parametrize("description, amount", [("", "10"), ("Paper", "0"), ("Paper", "-1")])
def test_create_expense_invalid(expense_service, sample_organization, description, amount):
    with pytest.raises(ValidationError):
        expense_service.create_expense(sample_organization.id, description, Decimal(amount))


def test_list_expenses_is_scoped(expense_service, sample_organization, other_organization, sample_expenses):
    expense_service.create_expense(other_organization.id, "Sails", Decimal("500"))

    descriptions = {e.description for e in expense_service.list_expenses(sample_organization.id)}
    assert descriptions == {"Books", "Insurance", "Stamps"}


def test_approve_and_reject(expense_service, sample_organization, sample_expenses):
    books = sample_expenses["Books"]
    stamps = sample_expenses["Stamps"]

    expense_service.approve(sample_organization.id, books.id)
    expense_service.reject(sample_organization.id, stamps.id)

    assert expense_service.get_expense(books.id).status == ExpenseStatus.APPROVED
    assert expense_service.get_expense(stamps.id).status == ExpenseStatus.REJECTED


def test_approve_expense_of_another_organization(expense_service, other_organization, sample_expenses):
    with pytest.raises(NotFoundError):
        expense_service.approve(other_organization.id, sample_expenses["Books"].id)


def test_expense_remaining_across_transactions(
    association_service, sample_organization, statement_transactions, sample_expenses
):
    insurance = sample_expenses["Insurance"]
    association_service.associate(
        sample_organization.id,
        statement_transactions["PRLV ASSURANCE LOCAL"].id,
        insurance.id,
        Decimal("45.50"),
    )
    association_service.associate(
        sample_organization.id,
        statement_transactions["CARTE LIBRAIRIE DU CENTRE"].id,
        insurance.id,
        Decimal("20.00"),
    )

    assert association_service.expense_remaining(insurance) == Decimal("134.50")
