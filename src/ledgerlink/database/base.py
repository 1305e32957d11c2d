"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerlink.domain.entities import (
    Activity,
    ActivityType,
    Expense,
    ExpenseStatus,
    Link,
    Organization,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for ledgerlink.

    Write methods raise ``ConflictError`` when a storage-level unique
    constraint rejects the write; any other storage failure propagates.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Organization operations
    @abstractmethod
    def create_organization(self, name: str, slug: str) -> int:
        """Create an organization. Returns organization ID."""
        pass

    @abstractmethod
    def get_organization(self, organization_id: int) -> Optional[Organization]:
        """Get organization by ID."""
        pass

    @abstractmethod
    def get_organization_by_slug(self, slug: str) -> Optional[Organization]:
        """Get organization by slug."""
        pass

    @abstractmethod
    def get_organization_by_name(self, name: str) -> Optional[Organization]:
        """Get organization by name."""
        pass

    @abstractmethod
    def list_organizations(self) -> list[Organization]:
        """List all organizations."""
        pass

    @abstractmethod
    def delete_organization(self, organization_id: int) -> None:
        """Delete an organization and everything it owns."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        organization_id: int,
        description: str,
        total_amount: Decimal,
        status: ExpenseStatus = ExpenseStatus.PENDING,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(self, organization_id: int) -> list[Expense]:
        """List expenses of an organization."""
        pass

    @abstractmethod
    def update_expense_status(self, expense_id: int, status: ExpenseStatus) -> None:
        """Update expense approval status."""
        pass

    # Bank transaction operations
    @abstractmethod
    def create_transaction(
        self,
        organization_id: int,
        fingerprint: str,
        date: date,
        value_date: date,
        amount: Decimal,
        description: str,
        balance: Decimal,
    ) -> int:
        """Create a bank transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get bank transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_fingerprint(self, fingerprint: str) -> Optional[Transaction]:
        """Get bank transaction by fingerprint, across all organizations."""
        pass

    @abstractmethod
    def transaction_exists(self, organization_id: int, fingerprint: str) -> bool:
        """Check if a transaction with given fingerprint exists for organization."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        organization_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List bank transactions of an organization, newest first."""
        pass

    @abstractmethod
    def list_transactions_by_creation(self, organization_id: int) -> list[Transaction]:
        """List bank transactions of an organization in creation order."""
        pass

    @abstractmethod
    def update_transaction_fingerprint(self, transaction_id: int, fingerprint: str) -> None:
        """Replace the stored fingerprint of a transaction."""
        pass

    # Association operations
    @abstractmethod
    def create_link(self, transaction_id: int, expense_id: int, amount: Decimal) -> int:
        """Link a transaction to an expense. Returns link ID."""
        pass

    @abstractmethod
    def get_link(self, link_id: int) -> Optional[Link]:
        """Get link by ID."""
        pass

    @abstractmethod
    def get_link_for_pair(self, transaction_id: int, expense_id: int) -> Optional[Link]:
        """Get the link between a transaction and an expense, if any."""
        pass

    @abstractmethod
    def list_links_for_transaction(self, transaction_id: int) -> list[Link]:
        """List links of a transaction."""
        pass

    @abstractmethod
    def list_links_for_expense(self, expense_id: int) -> list[Link]:
        """List links of an expense across all transactions."""
        pass

    @abstractmethod
    def delete_link(self, link_id: int) -> None:
        """Delete a link."""
        pass

    # Activity operations
    @abstractmethod
    def create_activity(
        self,
        organization_id: int,
        activity_type: ActivityType,
        description: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> int:
        """Record an activity. Returns activity ID."""
        pass

    @abstractmethod
    def list_activities(self, organization_id: int, limit: int = 10) -> list[Activity]:
        """List most recent activities of an organization."""
        pass
