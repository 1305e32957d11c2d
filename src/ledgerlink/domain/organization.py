"""Organization domain service."""

import re
from typing import Optional

from ledgerlink.database.base import Database
from ledgerlink.domain.entities import Organization as OrganizationEntity
from ledgerlink.domain.errors import ConflictError, NotFoundError, ValidationError, organization_not_found

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def slugify(name: str) -> str:
    """Derive a slug from an organization name ("Les Amis du Parc" -> "les-amis-du-parc")."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug


class OrganizationService:
    """Service for managing organizations."""

    def __init__(self, db: Database):
        """Initialize organization service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_organization(self, name: str, slug: Optional[str] = None) -> int:
        """Create a new organization.

        Args:
            name: Organization name
            slug: URL-safe identifier; derived from the name when omitted

        Returns:
            Organization ID

        Raises:
            ValidationError: If name is too short or slug is malformed
            ConflictError: If name or slug is already taken
        """
        name = name.strip()
        if len(name) < 2:
            raise ValidationError("Organization name must be at least 2 characters")

        slug = slug if slug is not None else slugify(name)
        if not SLUG_PATTERN.match(slug):
            raise ValidationError(
                "Slug can only contain lowercase letters, numbers, and hyphens"
            )

        if self.db.get_organization_by_name(name) is not None:
            raise ConflictError(f"Organization with name '{name}' already exists")
        if self.db.get_organization_by_slug(slug) is not None:
            raise ConflictError(f"Organization with slug '{slug}' already exists")

        return self.db.create_organization(name=name, slug=slug)

    def get_organization(self, organization_id: int) -> Optional[OrganizationEntity]:
        return self.db.get_organization(organization_id)

    def require_organization(self, organization_id: int) -> OrganizationEntity:
        """Get organization by ID or raise NotFoundError."""
        organization = self.db.get_organization(organization_id)
        if organization is None:
            raise NotFoundError(organization_not_found(organization_id))
        return organization

    def list_organizations(self) -> list[OrganizationEntity]:
        return self.db.list_organizations()

    def resolve(self, identifier: str) -> OrganizationEntity:
        """Resolve an organization by slug, name or numeric ID.

        Raises:
            NotFoundError: If nothing matches
        """
        identifier = identifier.strip()

        organization = self.db.get_organization_by_slug(identifier)
        if organization is None:
            organization = self.db.get_organization_by_name(identifier)
        if organization is None and identifier.isdigit():
            organization = self.db.get_organization(int(identifier))

        if organization is None:
            raise NotFoundError(organization_not_found(f"'{identifier}'"))
        return organization

    def delete_organization(self, organization_id: int) -> None:
        """Delete an organization with its transactions, links, expenses and activity."""
        self.require_organization(organization_id)
        self.db.delete_organization(organization_id)
