"""
Request and response schemas for API endpoints.
"""
from marketplace.schemas.auth import (
    RegisterRequest,
    ClientRegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    NoticesResponse,
)
from marketplace.schemas.user import (
    UserResponse,
    UserUpdate,
    PasswordChangeRequest,
    ListingCreate,
    ListingResponse,
    PublicListingResponse,
    BookmarkCreate,
    BookmarkResponse,
    CartItemCreate,
    CartItemResponse,
    MessageCreate,
    MessageResponse,
    DashboardResponse,
)
from marketplace.schemas.admin import (
    AdminResponse,
    AuditLogResponse,
    BanRequest,
    ClientStatusUpdate,
    PermissionsPayload,
    PermissionsUpdate,
    PromoteRequest,
)
from marketplace.schemas.contact import ContactCreate, ContactResponse

__all__ = [
    # Auth
    "RegisterRequest",
    "ClientRegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "NoticesResponse",
    # User
    "UserResponse",
    "UserUpdate",
    "PasswordChangeRequest",
    "ListingCreate",
    "ListingResponse",
    "PublicListingResponse",
    "BookmarkCreate",
    "BookmarkResponse",
    "CartItemCreate",
    "CartItemResponse",
    "MessageCreate",
    "MessageResponse",
    "DashboardResponse",
    # Admin
    "AdminResponse",
    "AuditLogResponse",
    "BanRequest",
    "ClientStatusUpdate",
    "PermissionsPayload",
    "PermissionsUpdate",
    "PromoteRequest",
    # Contact
    "ContactCreate",
    "ContactResponse",
]
