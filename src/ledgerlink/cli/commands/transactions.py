"""Bank transaction viewing command."""

import click

from ledgerlink.cli.organization_resolution import resolve_organization_or_exit
from ledgerlink.domain.association import AssociationService
from ledgerlink.domain.entities import ReconciliationState
from ledgerlink.utils.date_parser import parse_date

STATE_LABELS = {
    ReconciliationState.INELIGIBLE: "credit",
    ReconciliationState.UNMATCHED: "to match",
    ReconciliationState.PARTIAL: "partial",
    ReconciliationState.FULL: "associated",
}


@click.command("transactions")
@click.argument("organization", metavar="ORGANIZATION")
@click.option("--start-date", help="Start date (YYYY-MM-DD, DD/MM/YYYY, 'this month', ...)")
@click.option("--end-date", help="End date")
@click.option("--unreconciled", is_flag=True, help="Only show debits that still need expenses")
@click.option("--verbose", "-v", is_flag=True, help="Show links and fingerprints")
@click.pass_context
def list_transactions(
    ctx, organization: str, start_date: str, end_date: str, unreconciled: bool, verbose: bool
):
    """List bank transactions with their reconciliation status."""
    org = resolve_organization_or_exit(ctx, organization)
    service = AssociationService(ctx.obj["db"])

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    statuses = service.list_transactions(org.id, start_date=start, end_date=end)
    if unreconciled:
        statuses = [
            s for s in statuses
            if s.state in (ReconciliationState.UNMATCHED, ReconciliationState.PARTIAL)
        ]

    if not statuses:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(statuses)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12} {'Remaining':>12} {'Status':<11} {'Description':<50}"
    )
    click.echo("-" * 110)

    for status in statuses:
        txn = status.transaction
        remaining = "" if status.state == ReconciliationState.INELIGIBLE else f"{status.remaining_amount:,.2f}"
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.amount:>12,.2f} {remaining:>12} "
            f"{STATE_LABELS[status.state]:<11} {txn.description[:50]:<50}"
        )
        if verbose:
            click.echo(f"       Value date: {txn.value_date}  Balance: {txn.balance:,.2f}")
            click.echo(f"       Fingerprint: {txn.fingerprint}")
            for link in status.links:
                click.echo(f"       Link {link.id}: expense {link.expense_id} for {link.amount:,.2f}")


def register_commands(cli):
    """Register transactions command with main CLI."""
    cli.add_command(list_transactions)
