"""Expense commands."""

import click

from ledgerlink.cli.error_handling import handle_domain_error
from ledgerlink.cli.organization_resolution import resolve_organization_or_exit
from ledgerlink.domain.association import AssociationService
from ledgerlink.domain.errors import DomainError
from ledgerlink.domain.expense import ExpenseService
from ledgerlink.utils.amount_parser import parse_amount


@click.group()
def expense_group():
    """Manage expenses."""
    pass


@expense_group.command("add")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("description")
@click.argument("amount")
@click.pass_context
def add_expense(ctx, organization: str, description: str, amount: str):
    """Record an expense with its total amount including tax.

    Examples:
        ledgerlink expense add amis-du-parc "Printer paper" 42.90
    """
    org = resolve_organization_or_exit(ctx, organization)
    service = ExpenseService(ctx.obj["db"])

    try:
        total = parse_amount(amount)
        expense_id = service.create_expense(org.id, description, total)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created expense '{description}' for {total:.2f} (ID: {expense_id})")


@expense_group.command("list")
@click.argument("organization", metavar="ORGANIZATION")
@click.pass_context
def list_expenses(ctx, organization: str):
    """List expenses with the amount still to reconcile."""
    org = resolve_organization_or_exit(ctx, organization)
    db = ctx.obj["db"]
    service = ExpenseService(db)
    association_service = AssociationService(db)

    expenses = service.list_expenses(org.id)
    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Status':<10} {'Total':>12} {'Remaining':>12}  {'Description':<40}")
    click.echo("-" * 90)
    for expense in expenses:
        remaining = association_service.expense_remaining(expense)
        click.echo(
            f"{expense.id:<6} {expense.status.value:<10} {expense.total_amount:>12,.2f} "
            f"{remaining:>12,.2f}  {expense.description[:40]:<40}"
        )


@expense_group.command("approve")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("expense_id", type=int)
@click.pass_context
def approve_expense(ctx, organization: str, expense_id: int):
    """Approve an expense."""
    org = resolve_organization_or_exit(ctx, organization)
    service = ExpenseService(ctx.obj["db"])

    try:
        service.approve(org.id, expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Approved expense {expense_id}")


@expense_group.command("reject")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("expense_id", type=int)
@click.pass_context
def reject_expense(ctx, organization: str, expense_id: int):
    """Reject an expense."""
    org = resolve_organization_or_exit(ctx, organization)
    service = ExpenseService(ctx.obj["db"])

    try:
        service.reject(org.id, expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Rejected expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
