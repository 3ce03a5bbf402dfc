"""
Pydantic models for database documents.
"""
from marketplace.models.user import (
    User,
    Client,
    UserDocument,
    UserRole,
    UserKind,
    ClientStatus,
    ListingCondition,
    Listing,
    Bookmark,
    CartItem,
    Message,
    Ban,
    SocialLinks,
    parse_user_document,
)
from marketplace.models.admin import Admin, AdminPermissions
from marketplace.models.audit_log import AuditLog
from marketplace.models.contact import Contact

__all__ = [
    "User",
    "Client",
    "UserDocument",
    "UserRole",
    "UserKind",
    "ClientStatus",
    "ListingCondition",
    "Listing",
    "Bookmark",
    "CartItem",
    "Message",
    "Ban",
    "SocialLinks",
    "parse_user_document",
    "Admin",
    "AdminPermissions",
    "AuditLog",
    "Contact",
]
