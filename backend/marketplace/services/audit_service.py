"""
Audit trail of administrative actions. Insert and read only.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from marketplace.database.databases import marketplace_db
from marketplace.models.audit_log import AuditLog
from marketplace.models.common import to_object_id

logger = logging.getLogger(__name__)


class AuditLogService:
    """Service for recording and reading audit entries."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.logs_collection = db[marketplace_db.Collections.AUDIT_LOGS]

    async def record(
        self,
        action: str,
        target_user: Optional[str] = None,
        performed_by: Optional[str] = None,
        details: Optional[str] = None,
    ) -> AuditLog:
        """
        Append an audit entry.

        Args:
            action: Short action name, e.g. "suspend_user"
            target_user: Affected user id
            performed_by: Acting admin id (None for system actions)
            details: Free text
        """
        entry = AuditLog(
            action=action,
            target_user=target_user,
            performed_by=performed_by,
            details=details,
        )
        doc = entry.to_document()
        result = await self.logs_collection.insert_one(doc)
        logger.info(
            "Audit: %s target=%s by=%s", action, target_user, performed_by
        )
        return entry.model_copy(update={"id": str(result.inserted_id)})

    async def list_logs(
        self,
        target_user: Optional[str] = None,
        limit: int = 100,
    ) -> list[AuditLog]:
        """Most recent entries first."""
        query = {}
        if target_user is not None:
            query["targetUser"] = to_object_id(target_user)

        cursor = self.logs_collection.find(query, sort=[("timestamp", -1)], limit=limit)
        return [AuditLog.model_validate(doc) for doc in await cursor.to_list(length=None)]
