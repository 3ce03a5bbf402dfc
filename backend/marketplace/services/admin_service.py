"""
Admin service: admin assignments, moderation and audit trail access.

Every mutating action is written to the audit log. Actions are gated by the
acting admin's permission flags.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from marketplace.core.errors import (
    AlreadyAdminError,
    NotFoundError,
    PermissionDeniedError,
)
from marketplace.database.databases import marketplace_db
from marketplace.models.admin import Admin, AdminPermissions
from marketplace.models.audit_log import AuditLog
from marketplace.models.common import to_object_id, utcnow
from marketplace.models.contact import Contact
from marketplace.models.user import Ban, Client, ClientStatus, UserKind, UserRole
from marketplace.services.account_service import AccountService, AnyUser
from marketplace.services.audit_service import AuditLogService
from marketplace.services.contact_service import ContactService
from marketplace.services.standing import is_locked_out

logger = logging.getLogger(__name__)


class AdminService:
    """Service for administrative operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the marketplace database."""
        self.db = db
        self.admins_collection = db[marketplace_db.Collections.ADMINS]
        self.accounts = AccountService(db)
        self.audit = AuditLogService(db)
        self.contacts = ContactService(db)

    # ------------------------------------------------------------------
    # Admin records
    # ------------------------------------------------------------------

    async def get_admin_for_user(self, user_id: str) -> Optional[Admin]:
        try:
            doc = await self.admins_collection.find_one({"user": to_object_id(user_id)})
        except ValueError:
            return None
        if not doc:
            return None
        return Admin.model_validate(doc)

    async def require_permission(self, actor_user_id: str, permission: str) -> Admin:
        """
        Get the acting admin, checking it holds `permission`.

        Raises:
            PermissionDeniedError: If the user is not an admin, is suspended or
                banned, or lacks the permission
        """
        admin = await self.get_admin_for_user(actor_user_id)
        if admin is None:
            raise PermissionDeniedError("Not an admin")
        actor = await self.accounts.get_user_by_id(actor_user_id)
        if actor is None or is_locked_out(actor):
            logger.warning("Locked-out admin %s denied %s", actor_user_id, permission)
            raise PermissionDeniedError("Admin account is suspended or banned")
        if not admin.can(permission):
            logger.warning(
                "Admin %s denied %s", admin.id, permission
            )
            raise PermissionDeniedError(f"Missing permission: {permission}")
        return admin

    async def _create_admin(self, user: AnyUser, permissions: AdminPermissions) -> Admin:
        if await self.get_admin_for_user(user.id) is not None:
            raise AlreadyAdminError("User is already an admin")

        admin = Admin(user=user.id, permissions=permissions)
        try:
            result = await self.admins_collection.insert_one(admin.to_document())
        except DuplicateKeyError as e:
            raise AlreadyAdminError("User is already an admin") from e

        if user.role != UserRole.ADMIN:
            await self.accounts.update_fields(user.id, {"role": UserRole.ADMIN.value})
        return admin.model_copy(update={"id": str(result.inserted_id)})

    async def promote_user(
        self,
        actor_user_id: str,
        target_user_id: str,
        permissions: Optional[AdminPermissions] = None,
    ) -> Admin:
        """
        Make a user an admin. The user's role becomes `admin` in the same step.

        Raises:
            PermissionDeniedError: If the actor is not a super admin
            NotFoundError: If the target user does not exist
            AlreadyAdminError: If the target already has an admin record
        """
        actor = await self.require_permission(actor_user_id, "super_admin")
        target = await self.accounts.require_user(target_user_id)

        admin = await self._create_admin(target, permissions or AdminPermissions())
        await self.audit.record(
            "promote_user",
            target_user=target.id,
            performed_by=actor.id,
            details=f"Promoted {target.email} to admin",
        )
        return admin

    async def bootstrap_super_admin(self, user_id: str) -> Admin:
        """Create the first super admin; used from the command line."""
        target = await self.accounts.require_user(user_id)
        permissions = AdminPermissions(
            manage_users=True,
            manage_content=True,
            view_audit_logs=True,
            super_admin=True,
        )
        admin = await self._create_admin(target, permissions)
        await self.audit.record(
            "bootstrap_super_admin",
            target_user=target.id,
            details=f"Created super admin for {target.email}",
        )
        return admin

    async def update_permissions(
        self,
        actor_user_id: str,
        target_user_id: str,
        changes: dict[str, bool],
    ) -> Admin:
        actor = await self.require_permission(actor_user_id, "super_admin")
        admin = await self.get_admin_for_user(target_user_id)
        if admin is None:
            raise NotFoundError("Admin not found")

        permissions = admin.permissions.model_copy(update=changes)
        now = utcnow()
        await self.admins_collection.update_one(
            {"_id": to_object_id(admin.id)},
            {"$set": {"permissions": permissions.to_document(), "updatedAt": now}},
        )
        await self.audit.record(
            "update_permissions",
            target_user=target_user_id,
            performed_by=actor.id,
            details=", ".join(f"{k}={v}" for k, v in sorted(changes.items())),
        )
        return admin.model_copy(update={"permissions": permissions, "updated_at": now})

    # ------------------------------------------------------------------
    # Account standing
    # ------------------------------------------------------------------

    async def _moderate(
        self,
        actor: Admin,
        target_user_id: str,
        action: str,
        changes: dict,
        details: Optional[str] = None,
    ) -> AnyUser:
        updated = await self.accounts.update_fields(target_user_id, changes)
        await self.audit.record(
            action,
            target_user=target_user_id,
            performed_by=actor.id,
            details=details,
        )
        return updated

    async def suspend_user(self, actor_user_id: str, target_user_id: str) -> AnyUser:
        actor = await self.require_permission(actor_user_id, "manage_users")
        return await self._moderate(
            actor, target_user_id, "suspend_user", {"suspended": True}
        )

    async def unsuspend_user(self, actor_user_id: str, target_user_id: str) -> AnyUser:
        actor = await self.require_permission(actor_user_id, "manage_users")
        return await self._moderate(
            actor, target_user_id, "unsuspend_user", {"suspended": False}
        )

    async def ban_user(
        self,
        actor_user_id: str,
        target_user_id: str,
        days: int = 0,
        reason: Optional[str] = None,
    ) -> AnyUser:
        """Ban an account for `days` days; 0 bans until lifted."""
        actor = await self.require_permission(actor_user_id, "manage_users")
        ban = Ban(active=True, days=days, banned_at=utcnow())
        details = f"Banned for {days} day(s)" if days > 0 else "Banned indefinitely"
        if reason:
            details = f"{details}: {reason}"
        return await self._moderate(
            actor, target_user_id, "ban_user", {"ban": ban}, details
        )

    async def unban_user(self, actor_user_id: str, target_user_id: str) -> AnyUser:
        actor = await self.require_permission(actor_user_id, "manage_users")
        return await self._moderate(
            actor, target_user_id, "unban_user", {"ban": Ban()}
        )

    async def approve_user(self, actor_user_id: str, target_user_id: str) -> AnyUser:
        """Approve an account; clients also move to the `approved` status."""
        actor = await self.require_permission(actor_user_id, "manage_users")
        target = await self.accounts.require_user(target_user_id)
        changes: dict = {"approved": True}
        if isinstance(target, Client):
            changes["status"] = ClientStatus.APPROVED.value
        return await self._moderate(actor, target_user_id, "approve_user", changes)

    async def set_client_status(
        self,
        actor_user_id: str,
        target_user_id: str,
        status: ClientStatus,
    ) -> Client:
        actor = await self.require_permission(actor_user_id, "manage_users")
        target = await self.accounts.require_user(target_user_id)
        if not isinstance(target, Client):
            raise NotFoundError("Client not found")
        return await self._moderate(
            actor,
            target_user_id,
            "set_client_status",
            {"status": ClientStatus(status).value},
            details=f"Status set to {ClientStatus(status).value}",
        )

    async def list_users(
        self,
        actor_user_id: str,
        kind: Optional[UserKind] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[AnyUser]:
        await self.require_permission(actor_user_id, "manage_users")
        return await self.accounts.list_users(kind=kind, skip=skip, limit=limit)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    async def remove_listing(
        self,
        actor_user_id: str,
        owner_user_id: str,
        listing_id: str,
    ) -> None:
        actor = await self.require_permission(actor_user_id, "manage_content")
        await self.accounts.remove_listing(owner_user_id, listing_id)
        await self.audit.record(
            "remove_listing",
            target_user=owner_user_id,
            performed_by=actor.id,
            details=f"Removed listing {listing_id}",
        )

    async def list_contacts(self, actor_user_id: str, limit: int = 100) -> list[Contact]:
        await self.require_permission(actor_user_id, "manage_content")
        return await self.contacts.list_contacts(limit=limit)

    # ------------------------------------------------------------------
    # Audit trail
    # ------------------------------------------------------------------

    async def list_audit_logs(
        self,
        actor_user_id: str,
        target_user: Optional[str] = None,
        limit: int = 100,
    ) -> list[AuditLog]:
        await self.require_permission(actor_user_id, "view_audit_logs")
        return await self.audit.list_logs(target_user=target_user, limit=limit)
