"""CLI helpers for organization resolution."""

from __future__ import annotations

import click

from ledgerlink.domain.entities import Organization
from ledgerlink.domain.errors import NotFoundError
from ledgerlink.domain.organization import OrganizationService


def resolve_organization_or_exit(ctx: click.Context, identifier: str) -> Organization:
    """Resolve organization slug, name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    service = OrganizationService(ctx.obj["db"])
    try:
        return service.resolve(identifier)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
