"""
Service layer for business logic.
"""
from marketplace.services.account_service import AccountService
from marketplace.services.admin_service import AdminService
from marketplace.services.audit_service import AuditLogService
from marketplace.services.contact_service import ContactService

__all__ = [
    "AccountService",
    "AdminService",
    "AuditLogService",
    "ContactService",
]
