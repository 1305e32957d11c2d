"""CLI tests for end-to-end reconciliation workflows."""

import json

from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.cli.main import cli


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_help_does_not_open_database(cli_runner, tmp_path):
    db_path = tmp_path / "never-created.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "recompute-hashes" in result.output
    assert not db_path.exists()


def test_full_workflow(cli_runner, temp_db, statement_file):
    """Organization -> expense -> import -> associate -> transactions -> dissociate."""
    result = invoke(cli_runner, temp_db, "org", "create", "Les Amis du Parc")
    assert result.exit_code == 0
    assert "slug: les-amis-du-parc" in result.output

    result = invoke(cli_runner, temp_db, "expense", "add", "les-amis-du-parc", "Books", "100.00")
    assert result.exit_code == 0
    assert "(ID: 1)" in result.output

    result = invoke(cli_runner, temp_db, "import", "les-amis-du-parc", str(statement_file))
    assert result.exit_code == 0
    assert "Imported: 3 transactions" in result.output
    assert "Skipped: 0 duplicates" in result.output
    assert "File: releve_septembre.csv" in result.output

    bookshop = next(
        t for t in temp_db.list_transactions(1) if t.description == "CARTE LIBRAIRIE DU CENTRE"
    )

    # Without an amount the expense total is used since it fits
    result = invoke(cli_runner, temp_db, "associate", "les-amis-du-parc", str(bookshop.id), "1")
    assert result.exit_code == 0
    assert "for 100.00" in result.output
    assert "Remaining to reconcile: 20.00" in result.output

    result = invoke(cli_runner, temp_db, "transactions", "les-amis-du-parc", "--unreconciled")
    assert result.exit_code == 0
    assert "CARTE LIBRAIRIE DU CENTRE" in result.output
    assert "partial" in result.output
    assert "VIR INST DON ADHERENT" not in result.output

    result = invoke(cli_runner, temp_db, "expense", "list", "les-amis-du-parc")
    assert result.exit_code == 0
    assert "Books" in result.output

    result = invoke(cli_runner, temp_db, "dissociate", "les-amis-du-parc", "1")
    assert result.exit_code == 0
    assert "Removed association 1" in result.output

    result = invoke(cli_runner, temp_db, "activity", "les-amis-du-parc")
    assert result.exit_code == 0
    assert "BANK_TRANSACTION_EXPENSE_DISSOCIATED" in result.output


def test_import_twice_reports_duplicates(cli_runner, temp_db, sample_organization, statement_file):
    invoke(cli_runner, temp_db, "import", str(sample_organization.id), str(statement_file))

    result = invoke(
        cli_runner, temp_db, "import", str(sample_organization.id), str(statement_file), "--json"
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "importedCount": 0,
        "skippedCount": 3,
        "fileName": "releve_septembre.csv",
    }


def test_import_invalid_rows_lists_every_issue(cli_runner, temp_db, sample_organization, tmp_path):
    bad_file = tmp_path / "bad.csv"
    bad_file.write_text(
        "Date,Date de valeur,Montant,Libellé,Solde\n"
        "13/08/2025,13/08/2025,abc,Test,50.00\n"
        "14/08/2025,14/08/2025,10.00,,60.00\n",
        encoding="utf-8",
    )

    result = invoke(cli_runner, temp_db, "import", sample_organization.slug, str(bad_file))

    assert result.exit_code == 1
    assert "Error: Invalid CSV data" in result.output
    assert "Row 2: amount: Invalid amount format" in result.output
    assert "Row 3: description: Description is required" in result.output


def test_import_with_custom_columns(cli_runner, temp_db, sample_organization, tmp_path):
    csv_file = tmp_path / "en.csv"
    csv_file.write_text(
        "Booking,Value,Amount,Text,Balance\n02/01/2025,03/01/2025,-9.99,Coffee,90.01\n",
        encoding="utf-8",
    )

    result = invoke(
        cli_runner, temp_db, "import", sample_organization.slug, str(csv_file),
        "--columns", "Booking,Value,Amount,Text,Balance",
    )

    assert result.exit_code == 0
    assert "Imported: 1 transactions" in result.output


def test_unknown_organization(cli_runner, temp_db, statement_file):
    result = invoke(cli_runner, temp_db, "import", "nobody", str(statement_file))

    assert result.exit_code == 1
    assert "Organization 'nobody' not found" in result.output


def test_associate_over_remaining_fails(
    cli_runner, temp_db, sample_organization, statement_transactions, sample_expenses
):
    insurance = statement_transactions["PRLV ASSURANCE LOCAL"]

    result = invoke(
        cli_runner, temp_db, "associate", sample_organization.slug,
        str(insurance.id), str(sample_expenses["Insurance"].id), "60.00",
    )

    assert result.exit_code == 1
    assert "Amount exceeds remaining transaction amount (45.50)" in result.output


def test_associate_credit_fails(
    cli_runner, temp_db, sample_organization, statement_transactions, sample_expenses
):
    donation = statement_transactions["VIR INST DON ADHERENT"]

    result = invoke(
        cli_runner, temp_db, "associate", sample_organization.slug,
        str(donation.id), str(sample_expenses["Books"].id), "10",
    )

    assert result.exit_code == 1
    assert "only debit transactions" in result.output


def test_transactions_date_filter(cli_runner, temp_db, sample_organization, imported_statement):
    result = invoke(
        cli_runner, temp_db, "transactions", sample_organization.slug,
        "--start-date", "2025-09-01", "--end-date", "2025-09-30",
    )

    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "VIR INST DON ADHERENT" not in result.output


def test_transactions_invalid_date(cli_runner, temp_db, sample_organization):
    result = invoke(cli_runner, temp_db, "transactions", sample_organization.slug, "--start-date", "soon")

    assert result.exit_code == 1
    assert "Invalid start date" in result.output


def test_transactions_empty(cli_runner, temp_db, sample_organization):
    result = invoke(cli_runner, temp_db, "transactions", sample_organization.slug)

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_recompute_hashes(cli_runner, temp_db, sample_organization, imported_statement):
    result = invoke(cli_runner, temp_db, "recompute-hashes", sample_organization.slug, "--json")

    assert result.exit_code == 0
    assert json.loads(result.output) == {"updatedCount": 3, "errorCount": 0, "totalTransactions": 3}


def test_recompute_hashes_without_transactions(cli_runner, temp_db, sample_organization):
    result = invoke(cli_runner, temp_db, "recompute-hashes", sample_organization.slug)

    assert result.exit_code == 0
    assert "No transactions found to recompute." in result.output


def test_org_create_duplicate(cli_runner, temp_db, sample_organization):
    result = invoke(cli_runner, temp_db, "org", "create", "Les Amis du Parc")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_org_list(cli_runner, temp_db, sample_organization, other_organization):
    result = invoke(cli_runner, temp_db, "org", "list")

    assert result.exit_code == 0
    assert "Club de Voile" in result.output
    assert "les-amis-du-parc" in result.output


def test_expense_approve_and_reject(cli_runner, temp_db, sample_organization, sample_expenses):
    books = sample_expenses["Books"]

    result = invoke(cli_runner, temp_db, "expense", "approve", sample_organization.slug, str(books.id))
    assert result.exit_code == 0
    assert f"Approved expense {books.id}" in result.output

    result = invoke(cli_runner, temp_db, "expense", "reject", sample_organization.slug, "999")
    assert result.exit_code == 1
    assert "Expense 999 not found" in result.output


def test_expense_add_invalid_amount(cli_runner, temp_db, sample_organization):
    result = invoke(cli_runner, temp_db, "expense", "add", sample_organization.slug, "Paper", "lots")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_recompute_hashes_storage_error(cli_runner, temp_db, sample_organization, monkeypatch):
    def locked(self, organization_id):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(
        "ledgerlink.cli.commands.maintenance.FingerprintRecomputeService.recompute", locked
    )

    result = invoke(cli_runner, temp_db, "recompute-hashes", sample_organization.slug)

    assert result.exit_code == 1
    assert "Internal error: SQLAlchemyError" in result.output
