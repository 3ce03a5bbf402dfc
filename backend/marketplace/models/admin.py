"""
Admin assignment model for the `admins` collection.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from marketplace.models.common import DocumentModel, ObjectIdStr, utcnow


class AdminPermissions(DocumentModel):
    """
    Independently togglable admin permissions.

    New admins can moderate users and read the audit trail; content control
    and super privileges need explicit elevation.
    """
    manage_users: bool = True
    manage_content: bool = False
    view_audit_logs: bool = True
    super_admin: bool = False


class Admin(DocumentModel):
    """Links one user account to its admin permission set."""
    id: Optional[ObjectIdStr] = Field(None, alias="_id")
    user: ObjectIdStr = Field(..., description="The promoted user's id")
    permissions: AdminPermissions = Field(default_factory=AdminPermissions)
    assigned_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def can(self, permission: str) -> bool:
        """Whether this admin holds a permission; super admins hold all of them."""
        return self.permissions.super_admin or bool(getattr(self.permissions, permission))
