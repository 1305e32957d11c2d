"""Shared pytest fixtures for ledgerlink tests."""

import logging
import tempfile
import os
from decimal import Decimal
import pytest
import structlog

from ledgerlink.database.factories import create_sqlite_database
from ledgerlink.domain.association import AssociationService
from ledgerlink.domain.bank_import import BankImportService
from ledgerlink.domain.expense import ExpenseService
from ledgerlink.domain.fingerprint_recompute import FingerprintRecomputeService
from ledgerlink.domain.organization import OrganizationService

SAMPLE_STATEMENT = (
    "Date,Date de valeur,Montant,Libellé,Solde\n"
    "13/08/2025,13/08/2025,50.00,VIR INST DON ADHERENT,50.00\n"
    "01/09/2025,01/09/2025,-120.00,CARTE LIBRAIRIE DU CENTRE,-70.00\n"
    "05/09/2025,06/09/2025,-45.50,PRLV ASSURANCE LOCAL,-115.50\n"
)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def organization_service(temp_db):
    """Create an OrganizationService with a temporary database."""
    return OrganizationService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a BankImportService with a temporary database."""
    return BankImportService(temp_db)


@pytest.fixture
def association_service(temp_db):
    """Create an AssociationService with a temporary database."""
    return AssociationService(temp_db)


@pytest.fixture
def recompute_service(temp_db):
    """Create a FingerprintRecomputeService with a temporary database."""
    return FingerprintRecomputeService(temp_db)


@pytest.fixture
def sample_organization(organization_service):
    """Create a sample organization for testing."""
    organization_id = organization_service.create_organization(name="Les Amis du Parc")
    return organization_service.get_organization(organization_id)


@pytest.fixture
def other_organization(organization_service):
    """Create a second, unrelated organization."""
    organization_id = organization_service.create_organization(name="Club de Voile")
    return organization_service.get_organization(organization_id)


@pytest.fixture
def imported_statement(import_service, sample_organization):
    """Import SAMPLE_STATEMENT for the sample organization."""
    return import_service.import_statement(
        sample_organization.id, SAMPLE_STATEMENT.encode("utf-8"), "releve.csv"
    )


@pytest.fixture
def statement_transactions(temp_db, sample_organization, imported_statement):
    """Imported sample transactions keyed by description."""
    return {
        txn.description: txn for txn in temp_db.list_transactions(sample_organization.id)
    }


@pytest.fixture
def sample_expenses(expense_service, sample_organization):
    """Create expenses of 100.00, 200.00 and 30.00, keyed by description."""
    expenses = {}
    for description, total in [("Books", "100.00"), ("Insurance", "200.00"), ("Stamps", "30.00")]:
        expense_id = expense_service.create_expense(
            sample_organization.id, description, Decimal(total)
        )
        expenses[description] = expense_service.get_expense(expense_id)
    return expenses


@pytest.fixture
def statement_file(tmp_path):
    """Write SAMPLE_STATEMENT to a file and return its path."""
    path = tmp_path / "releve_septembre.csv"
    path.write_bytes(SAMPLE_STATEMENT.encode("utf-8"))
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def sample_statement_bytes():
    """SAMPLE_STATEMENT encoded as UTF-8."""
    return SAMPLE_STATEMENT.encode("utf-8")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the CLI or setup_logging."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
