"""
Dependencies for dependency injection in routes.
"""
from marketplace.dependencies.auth import (
    GuardRedirect,
    require_login,
    require_admin,
    get_current_user,
    require_active_user_id,
    CurrentUserId,
    AdminUserId,
    CurrentUser,
)
from marketplace.dependencies.services import (
    get_account_service,
    get_admin_service,
    get_contact_service,
)

__all__ = [
    "GuardRedirect",
    "require_login",
    "require_admin",
    "get_current_user",
    "require_active_user_id",
    "CurrentUserId",
    "AdminUserId",
    "CurrentUser",
    "get_account_service",
    "get_admin_service",
    "get_contact_service",
]
