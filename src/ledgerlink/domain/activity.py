"""Activity (audit log) domain service."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ledgerlink.database.base import Database
from ledgerlink.domain.entities import Activity as ActivityEntity, ActivityType
from ledgerlink.domain.errors import DomainError

logger = structlog.get_logger(__name__)


class ActivityService:
    """Records what happened to an organization's reconciliation data.

    Recording is fire-and-forget: a failing audit write is logged and never
    fails the operation that triggered it.
    """

    def __init__(self, db: Database):
        self.db = db

    def record(
        self,
        organization_id: int,
        activity_type: ActivityType,
        description: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[int]:
        """Record an activity.

        Returns:
            Activity ID, or None if the write failed
        """
        try:
            return self.db.create_activity(
                organization_id=organization_id,
                activity_type=activity_type,
                description=description,
                entity_type=entity_type,
                entity_id=entity_id,
                metadata=metadata,
            )
        except (SQLAlchemyError, DomainError) as e:
            logger.warning(
                "activity_record_failed",
                organization_id=organization_id,
                activity_type=activity_type.value,
                error=str(e),
            )
            return None

    def list_recent(self, organization_id: int, limit: int = 10) -> list[ActivityEntity]:
        return self.db.list_activities(organization_id, limit=limit)
