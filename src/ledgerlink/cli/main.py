"""Main CLI entry point."""

import click
from ledgerlink.database.factories import create_sqlite_database
from ledgerlink.utils.logging import setup_logging

# Import and register all commands at module level
from ledgerlink.cli.commands import (
    organization,
    expense,
    import_cmd,
    transactions,
    associate,
    maintenance,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLINK_DB_PATH environment variable)",
    envvar="LEDGERLINK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="LEDGERLINK_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.option("--log-json", is_flag=True, help="Write logs as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, log_json: bool):
    """Ledgerlink - bank reconciliation for associations.

    Import bank statements, skip lines already imported, and link bank debits
    to the expenses they pay for.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level=log_level, json_output=log_json)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
organization.register_commands(cli)
expense.register_commands(cli)
import_cmd.register_commands(cli)
transactions.register_commands(cli)
associate.register_commands(cli)
maintenance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
