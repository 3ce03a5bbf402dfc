"""
Admin request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from marketplace.models.user import ClientStatus


class PermissionsPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    manage_users: bool = True
    manage_content: bool = False
    view_audit_logs: bool = True
    super_admin: bool = False


class PermissionsUpdate(BaseModel):
    """Partial permission update; omitted flags keep their value."""
    manage_users: Optional[bool] = None
    manage_content: Optional[bool] = None
    view_audit_logs: Optional[bool] = None
    super_admin: Optional[bool] = None


class PromoteRequest(BaseModel):
    permissions: Optional[PermissionsPayload] = None


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user: str
    permissions: PermissionsPayload
    assigned_at: datetime


class BanRequest(BaseModel):
    days: int = Field(default=0, ge=0, description="Ban length in days, 0 for indefinite")
    reason: Optional[str] = None


class ClientStatusUpdate(BaseModel):
    status: ClientStatus


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    action: str
    target_user: Optional[str] = None
    performed_by: Optional[str] = None
    details: Optional[str] = None
    timestamp: datetime
