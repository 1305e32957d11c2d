"""Bank statement import domain service."""

from pathlib import Path

import structlog

from ledgerlink.database.base import Database
from ledgerlink.domain.activity import ActivityService
from ledgerlink.domain.encoding import decode_statement_bytes
from ledgerlink.domain.entities import ActivityType, ImportSummary
from ledgerlink.domain.errors import (
    NO_DATA_FOUND,
    ConflictError,
    NotFoundError,
    ValidationError,
    missing_columns,
    organization_not_found,
)
from ledgerlink.domain.fingerprint import fingerprint_for
from ledgerlink.domain.statement_csv import (
    DEFAULT_COLUMNS,
    StatementColumns,
    find_missing_columns,
    parse_csv,
)
from ledgerlink.domain.statement_rows import FIRST_DATA_ROW, RawStatementRow, validate_rows

logger = structlog.get_logger(__name__)


class BankImportService:
    """Service for importing bank statement CSV files."""

    def __init__(self, db: Database):
        """Initialize bank import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.activity_service = ActivityService(db)

    def import_file(
        self,
        organization_id: int,
        csv_file_path: str,
        columns: StatementColumns = DEFAULT_COLUMNS,
    ) -> ImportSummary:
        """Import a statement file from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist
            See import_statement for the rest
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        return self.import_statement(
            organization_id=organization_id,
            raw=csv_path.read_bytes(),
            file_name=csv_path.name,
            columns=columns,
        )

    def import_statement(
        self,
        organization_id: int,
        raw: bytes,
        file_name: str,
        columns: StatementColumns = DEFAULT_COLUMNS,
    ) -> ImportSummary:
        """Import the bytes of a statement file.

        The whole file is validated before anything is written. Lines whose
        fingerprint already exists are skipped, so importing overlapping
        statements is safe.

        Args:
            organization_id: Owning organization
            raw: Raw file content in any supported encoding
            file_name: Original file name, kept for the activity log
            columns: Header names of the statement columns

        Returns:
            ImportSummary with imported and skipped counts

        Raises:
            NotFoundError: If the organization doesn't exist
            ValidationError: If the file is empty, lacks a column, or has invalid rows
            SQLAlchemyError: If a write fails; rows written before it stay committed
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        csv_text = decode_statement_bytes(raw)
        rows = parse_csv(csv_text)

        if not rows:
            raise ValidationError(NO_DATA_FOUND)

        missing = find_missing_columns(rows[0], columns)
        if missing:
            raise ValidationError(missing_columns(columns.names()), details=missing)

        lines = validate_rows(
            RawStatementRow.from_mapping(row_num, row, columns)
            for row_num, row in enumerate(rows, start=FIRST_DATA_ROW)
        )

        imported = 0
        skipped = 0

        for line in lines:
            fingerprint = fingerprint_for(
                line.date, line.amount, line.description, line.balance, organization_id
            )

            if self.db.transaction_exists(organization_id, fingerprint):
                skipped += 1
                continue

            try:
                self.db.create_transaction(
                    organization_id=organization_id,
                    fingerprint=fingerprint,
                    date=line.date,
                    value_date=line.value_date,
                    amount=line.amount,
                    description=line.description,
                    balance=line.balance,
                )
            except ConflictError:
                # Another import inserted the same line after our existence check
                logger.info("duplicate_insert_skipped", fingerprint=fingerprint)
                skipped += 1
                continue

            imported += 1

        logger.info(
            "statement_imported",
            organization_id=organization_id,
            file_name=file_name,
            imported=imported,
            skipped=skipped,
        )

        self.activity_service.record(
            organization_id=organization_id,
            activity_type=ActivityType.BANK_TRANSACTIONS_IMPORTED,
            entity_type="bank_transaction",
            description=f"Imported {imported} bank transactions from CSV",
            metadata={"importedCount": imported, "skippedCount": skipped, "fileName": file_name},
        )

        return ImportSummary(imported_count=imported, skipped_count=skipped, file_name=file_name)
