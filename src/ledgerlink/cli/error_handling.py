"""CLI error handling helpers."""

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error, with per-row details if any, and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ValidationError):
        for detail in error.details:
            click.echo(f"  {detail}", err=True)
    ctx.exit(1)


def handle_storage_error(ctx: click.Context, error: SQLAlchemyError) -> None:
    """Render an unexpected storage failure and exit with failure."""
    click.echo(f"Internal error: {error.__class__.__name__}: {error}", err=True)
    ctx.exit(1)
