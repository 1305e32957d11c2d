"""Maintenance and audit commands."""

import json

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerlink.cli.organization_resolution import resolve_organization_or_exit
from ledgerlink.domain.activity import ActivityService
from ledgerlink.domain.errors import DomainError
from ledgerlink.domain.fingerprint_recompute import FingerprintRecomputeService


@click.command("recompute-hashes")
@click.argument("organization", metavar="ORGANIZATION")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def recompute_hashes(ctx, organization: str, as_json: bool):
    """Recompute the duplicate-detection fingerprint of every transaction.

    Run this after the fingerprint format changes so that re-imports of old
    statements are still recognised as duplicates.
    """
    org = resolve_organization_or_exit(ctx, organization)
    service = FingerprintRecomputeService(ctx.obj["db"])

    try:
        summary = service.recompute(org.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except SQLAlchemyError as e:
        handle_storage_error(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(summary.as_dict()))
        return

    if summary.total_transactions == 0:
        click.echo("No transactions found to recompute.")
        return

    click.echo("\nFingerprint recompute complete:")
    click.echo(f"  Updated: {summary.updated_count}")
    click.echo(f"  Errors: {summary.error_count}")
    click.echo(f"  Total: {summary.total_transactions}")


@click.command("activity")
@click.argument("organization", metavar="ORGANIZATION")
@click.option("--limit", type=int, default=10, show_default=True, help="Number of entries")
@click.pass_context
def show_activity(ctx, organization: str, limit: int):
    """Show recent reconciliation activity."""
    org = resolve_organization_or_exit(ctx, organization)
    service = ActivityService(ctx.obj["db"])

    activities = service.list_recent(org.id, limit=limit)
    if not activities:
        click.echo("No activity recorded.")
        return

    for activity in activities:
        click.echo(
            f"{activity.created_at:%Y-%m-%d %H:%M}  {activity.activity_type.value:<40} "
            f"{activity.description}"
        )


def register_commands(cli):
    """Register maintenance commands with main CLI."""
    cli.add_command(recompute_hashes)
    cli.add_command(show_activity)
