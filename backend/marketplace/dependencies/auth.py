"""
FastAPI adapters for the route guards.

A refused request gets the guard's notices flashed into its session and is
redirected; downstream handlers never run.
"""
from typing import Annotated, Callable, NoReturn

from fastapi import Depends, Request, status

from marketplace.config import get_settings
from marketplace.core.flash import flash
from marketplace.dependencies.guards import (
    ACCOUNT_LOCKED_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    RequestContext,
    ResponseContext,
    is_admin,
    is_authenticated,
)
from marketplace.dependencies.services import get_account_service
from marketplace.services.account_service import AccountService, AnyUser
from marketplace.services.standing import is_locked_out


class GuardRedirect(Exception):
    """Raised by guard dependencies; the app turns it into a redirect."""

    def __init__(self, location: str, status_code: int = status.HTTP_303_SEE_OTHER):
        super().__init__(location)
        self.location = location
        self.status_code = status_code


def _enforce(request: Request, guard: Callable[..., bool], **kwargs) -> None:
    response_ctx = ResponseContext()
    if guard(RequestContext(session=request.session), response_ctx, **kwargs):
        return
    for notice in response_ctx.notices:
        flash(request.session, notice.message, notice.category)
    raise GuardRedirect(response_ctx.redirect_to)


async def require_login(request: Request) -> str:
    """
    Dependency that only lets logged-in sessions through.

    Returns:
        The session's user id
    """
    _enforce(request, is_authenticated, login_path=get_settings().login_path)
    return request.session["userId"]


async def require_admin(
    request: Request,
    user_id: Annotated[str, Depends(require_login)],
) -> str:
    """Dependency for admin routes; runs the login guard first."""
    _enforce(request, is_admin, dashboard_path=get_settings().dashboard_path)
    return user_id


def _end_session(request: Request, message: str) -> NoReturn:
    request.session.clear()
    flash(request.session, message, "error")
    raise GuardRedirect(get_settings().login_path)


async def get_current_user(
    request: Request,
    user_id: Annotated[str, Depends(require_login)],
    accounts: Annotated[AccountService, Depends(get_account_service)],
) -> AnyUser:
    """
    The logged-in account, which must still be in good standing.

    A session whose account was deleted, suspended or banned after login is
    ended and sent back to login.
    """
    user = await accounts.get_user_by_id(user_id)
    if user is None:
        _end_session(request, LOGIN_REQUIRED_MESSAGE)
    if is_locked_out(user):
        _end_session(request, ACCOUNT_LOCKED_MESSAGE)
    return user


async def require_active_user_id(
    user: Annotated[AnyUser, Depends(get_current_user)],
) -> str:
    """Dependency for routes that only need the id of an account in good standing."""
    return user.id


# Type aliases for cleaner route signatures
CurrentUserId = Annotated[str, Depends(require_active_user_id)]
AdminUserId = Annotated[str, Depends(require_admin)]
CurrentUser = Annotated[AnyUser, Depends(get_current_user)]
