"""
Audit log model for the `auditlogs` collection.

Entries are inserted once and never updated or deleted.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from marketplace.models.common import DocumentModel, ObjectIdStr, utcnow


class AuditLog(DocumentModel):
    id: Optional[ObjectIdStr] = Field(None, alias="_id")
    action: str = Field(..., min_length=1, description="What was done")
    target_user: Optional[ObjectIdStr] = Field(None, description="Affected user id")
    performed_by: Optional[ObjectIdStr] = Field(None, description="Acting admin id")
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
