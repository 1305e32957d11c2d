"""Organization management commands."""

import click

from ledgerlink.cli.error_handling import handle_domain_error
from ledgerlink.domain.errors import DomainError
from ledgerlink.domain.organization import OrganizationService


@click.group()
def org_group():
    """Manage organizations."""
    pass


@org_group.command("create")
@click.argument("name", metavar="ORGANIZATION_NAME")
@click.option("--slug", help="URL-safe identifier (derived from the name if omitted)")
@click.pass_context
def create_organization(ctx, name: str, slug: str | None):
    """Create a new organization.

    Examples:
        ledgerlink org create "Les Amis du Parc"
        ledgerlink org create "Food Bank" --slug food-bank-north
    """
    service = OrganizationService(ctx.obj["db"])

    try:
        organization_id = service.create_organization(name=name, slug=slug)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    organization = service.get_organization(organization_id)
    click.echo(f"Created organization '{organization.name}' (ID: {organization.id}, slug: {organization.slug})")


@org_group.command("list")
@click.pass_context
def list_organizations(ctx):
    """List all organizations."""
    service = OrganizationService(ctx.obj["db"])

    organizations = service.list_organizations()
    if not organizations:
        click.echo("No organizations found.")
        return

    click.echo("\nOrganizations:")
    click.echo("-" * 60)
    for org in organizations:
        click.echo(f"ID: {org.id:3d} | {org.name:30s} | Slug: {org.slug}")


def register_commands(cli):
    """Register organization commands with main CLI."""
    cli.add_command(org_group, name="org")
