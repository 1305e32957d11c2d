"""Bank statement import command."""

import json

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.cli.error_handling import handle_domain_error, handle_storage_error
from ledgerlink.cli.organization_resolution import resolve_organization_or_exit
from ledgerlink.domain.bank_import import BankImportService
from ledgerlink.domain.errors import DomainError
from ledgerlink.domain.statement_csv import DEFAULT_COLUMNS, StatementColumns


@click.command("import")
@click.argument("organization", metavar="ORGANIZATION")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--columns",
    help=(
        "Header names for date, value date, amount, description and balance, "
        f"comma-separated (default: \"{','.join(DEFAULT_COLUMNS.names())}\")"
    ),
)
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def import_statement(ctx, organization: str, csv_file: str, columns: str | None, as_json: bool):
    """Import a bank statement CSV file.

    Lines already imported for the organization are skipped.
    """
    org = resolve_organization_or_exit(ctx, organization)
    service = BankImportService(ctx.obj["db"])

    try:
        statement_columns = StatementColumns.from_string(columns) if columns else DEFAULT_COLUMNS
        summary = service.import_file(org.id, csv_file, columns=statement_columns)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except SQLAlchemyError as e:
        handle_storage_error(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(summary.as_dict()))
        return

    click.echo("\nImport complete:")
    click.echo(f"  File: {summary.file_name}")
    click.echo(f"  Imported: {summary.imported_count} transactions")
    click.echo(f"  Skipped: {summary.skipped_count} duplicates")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
