"""Commands for linking bank transactions to expenses."""

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerlink.cli.organization_resolution import resolve_organization_or_exit
from ledgerlink.domain.association import AssociationService
from ledgerlink.domain.errors import DomainError
from ledgerlink.domain.expense import ExpenseService
from ledgerlink.utils.amount_parser import parse_amount


@click.command("associate")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("transaction_id", type=int)
@click.argument("expense_id", type=int)
@click.argument("amount", required=False)
@click.pass_context
def associate(ctx, organization: str, transaction_id: int, expense_id: int, amount: str | None):
    """Allocate part of a bank debit to an expense.

    AMOUNT defaults to the smaller of the expense total and what remains to
    reconcile on the transaction.

    Examples:
        ledgerlink associate amis-du-parc 12 3
        ledgerlink associate amis-du-parc 12 3 25.50
    """
    org = resolve_organization_or_exit(ctx, organization)
    db = ctx.obj["db"]
    service = AssociationService(db)
    expense_service = ExpenseService(db)

    try:
        if amount is None:
            transaction = service.get_organization_transaction(org.id, transaction_id)
            expense = expense_service.get_organization_expense(org.id, expense_id)
            value = service.suggested_amount(transaction, expense)
        else:
            value = parse_amount(amount)

        link = service.associate(org.id, transaction_id, expense_id, value)
        transaction = service.get_organization_transaction(org.id, transaction_id)
        remaining = service.remaining_to_reconcile(transaction)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    except SQLAlchemyError as e:
        handle_storage_error(ctx, e)
        return

    click.echo(
        f"Associated expense {expense_id} with transaction {transaction_id} "
        f"for {link.amount:,.2f} (link ID: {link.id})"
    )
    click.echo(f"Remaining to reconcile: {remaining:,.2f}")


@click.command("dissociate")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("link_id", type=int)
@click.pass_context
def dissociate(ctx, organization: str, link_id: int):
    """Remove a link between a bank transaction and an expense."""
    org = resolve_organization_or_exit(ctx, organization)
    service = AssociationService(ctx.obj["db"])

    try:
        service.remove_association(org.id, link_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except SQLAlchemyError as e:
        handle_storage_error(ctx, e)
        return

    click.echo(f"Removed association {link_id}")


def register_commands(cli):
    """Register association commands with main CLI."""
    cli.add_command(associate)
    cli.add_command(dissociate)
