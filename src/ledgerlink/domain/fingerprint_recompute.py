"""Fingerprint recompute maintenance service."""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.database.base import Database
from ledgerlink.domain.activity import ActivityService
from ledgerlink.domain.entities import ActivityType, RecomputeSummary
from ledgerlink.domain.errors import DomainError, NotFoundError, organization_not_found
from ledgerlink.domain.fingerprint import fingerprint_for

logger = structlog.get_logger(__name__)


class FingerprintRecomputeService:
    """Brings stored fingerprints in line with the current fingerprint contract."""

    def __init__(self, db: Database):
        self.db = db
        self.activity_service = ActivityService(db)

    def recompute(self, organization_id: int) -> RecomputeSummary:
        """Recompute the fingerprint of every transaction of an organization.

        Transactions are processed in creation order from their stored field
        values. A new fingerprint already held by another transaction is not
        written, since that would merge two distinct lines; it is counted as
        an error. A failure on one row is counted and the loop moves on.

        Returns:
            RecomputeSummary with updated, error and total counts

        Raises:
            NotFoundError: If the organization doesn't exist
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        transactions = self.db.list_transactions_by_creation(organization_id)
        if not transactions:
            return RecomputeSummary(updated_count=0, error_count=0, total_transactions=0)

        updated = 0
        errors = 0

        for transaction in transactions:
            try:
                new_fingerprint = fingerprint_for(
                    transaction.date,
                    transaction.amount,
                    transaction.description,
                    transaction.balance,
                    organization_id,
                )

                holder = self.db.get_transaction_by_fingerprint(new_fingerprint)
                if holder is not None and holder.id != transaction.id:
                    logger.warning(
                        "fingerprint_collision",
                        transaction_id=transaction.id,
                        colliding_transaction_id=holder.id,
                    )
                    errors += 1
                    continue

                self.db.update_transaction_fingerprint(transaction.id, new_fingerprint)
                updated += 1
            except (SQLAlchemyError, DomainError) as e:
                logger.error(
                    "fingerprint_update_failed",
                    transaction_id=transaction.id,
                    error=str(e),
                )
                errors += 1

        logger.info(
            "fingerprints_recomputed",
            organization_id=organization_id,
            updated=updated,
            errors=errors,
            total=len(transactions),
        )

        self.activity_service.record(
            organization_id=organization_id,
            activity_type=ActivityType.BANK_TRANSACTION_HASHES_RECOMPUTED,
            entity_type="bank_transaction",
            description=f"Recomputed hashes for {updated} bank transactions",
            metadata={
                "updatedCount": updated,
                "errorCount": errors,
                "totalTransactions": len(transactions),
            },
        )

        return RecomputeSummary(
            updated_count=updated,
            error_count=errors,
            total_transactions=len(transactions),
        )
