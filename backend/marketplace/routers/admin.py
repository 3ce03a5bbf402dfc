"""
Admin router. Every route needs a logged-in session with the `admin` role;
the acting admin's permission flags are checked by the service.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace.dependencies.auth import AdminUserId
from marketplace.dependencies.services import get_admin_service
from marketplace.models.admin import AdminPermissions
from marketplace.models.user import UserKind
from marketplace.routers.errors import to_http_exception
from marketplace.schemas.admin import (
    AdminResponse,
    AuditLogResponse,
    BanRequest,
    ClientStatusUpdate,
    PermissionsUpdate,
    PromoteRequest,
)
from marketplace.schemas.contact import ContactResponse
from marketplace.schemas.user import UserResponse
from marketplace.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])

Admins = Annotated[AdminService, Depends(get_admin_service)]


@router.get("/users", response_model=list[UserResponse], summary="List accounts")
async def list_users(
    admin_user_id: AdminUserId,
    admins: Admins,
    kind: Optional[UserKind] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    try:
        users = await admins.list_users(admin_user_id, kind=kind, skip=skip, limit=limit)
    except ValueError as e:
        raise to_http_exception(e)
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "/users/{user_id}/promote",
    response_model=AdminResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Make a user an admin",
)
async def promote_user(
    user_id: str,
    admin_user_id: AdminUserId,
    admins: Admins,
    body: Optional[PromoteRequest] = None,
):
    permissions = None
    if body is not None and body.permissions is not None:
        permissions = AdminPermissions(**body.permissions.model_dump())
    try:
        admin = await admins.promote_user(admin_user_id, user_id, permissions)
    except ValueError as e:
        raise to_http_exception(e)
    return AdminResponse.model_validate(admin)


@router.patch(
    "/users/{user_id}/permissions",
    response_model=AdminResponse,
    summary="Change an admin's permissions",
)
async def update_permissions(
    user_id: str,
    body: PermissionsUpdate,
    admin_user_id: AdminUserId,
    admins: Admins,
):
    try:
        admin = await admins.update_permissions(
            admin_user_id, user_id, body.model_dump(exclude_none=True)
        )
    except ValueError as e:
        raise to_http_exception(e)
    return AdminResponse.model_validate(admin)


@router.post("/users/{user_id}/suspend", response_model=UserResponse, summary="Suspend an account")
async def suspend_user(user_id: str, admin_user_id: AdminUserId, admins: Admins):
    try:
        user = await admins.suspend_user(admin_user_id, user_id)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/unsuspend", response_model=UserResponse, summary="Lift a suspension")
async def unsuspend_user(user_id: str, admin_user_id: AdminUserId, admins: Admins):
    try:
        user = await admins.unsuspend_user(admin_user_id, user_id)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/ban", response_model=UserResponse, summary="Ban an account")
async def ban_user(user_id: str, body: BanRequest, admin_user_id: AdminUserId, admins: Admins):
    try:
        user = await admins.ban_user(admin_user_id, user_id, days=body.days, reason=body.reason)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/unban", response_model=UserResponse, summary="Lift a ban")
async def unban_user(user_id: str, admin_user_id: AdminUserId, admins: Admins):
    try:
        user = await admins.unban_user(admin_user_id, user_id)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/approve", response_model=UserResponse, summary="Approve an account")
async def approve_user(user_id: str, admin_user_id: AdminUserId, admins: Admins):
    try:
        user = await admins.approve_user(admin_user_id, user_id)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.put("/users/{user_id}/status", response_model=UserResponse, summary="Set a client's status")
async def set_client_status(
    user_id: str,
    body: ClientStatusUpdate,
    admin_user_id: AdminUserId,
    admins: Admins,
):
    try:
        client = await admins.set_client_status(admin_user_id, user_id, body.status)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(client)


@router.delete(
    "/users/{user_id}/listings/{listing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Take down a listing",
)
async def remove_listing(
    user_id: str,
    listing_id: str,
    admin_user_id: AdminUserId,
    admins: Admins,
):
    try:
        await admins.remove_listing(admin_user_id, user_id, listing_id)
    except ValueError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/audit-logs", response_model=list[AuditLogResponse], summary="Audit trail")
async def list_audit_logs(
    admin_user_id: AdminUserId,
    admins: Admins,
    target_user: Optional[str] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    try:
        logs = await admins.list_audit_logs(admin_user_id, target_user=target_user, limit=limit)
    except ValueError as e:
        raise to_http_exception(e)
    return [AuditLogResponse.model_validate(entry) for entry in logs]


@router.get("/contacts", response_model=list[ContactResponse], summary="Contact messages")
async def list_contacts(
    admin_user_id: AdminUserId,
    admins: Admins,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    try:
        contacts = await admins.list_contacts(admin_user_id, limit=limit)
    except ValueError as e:
        raise to_http_exception(e)
    return [ContactResponse.model_validate(c) for c in contacts]
