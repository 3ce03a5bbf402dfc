"""
Route guards.

Guards are plain functions over an explicit request context. They never
touch the session; when they refuse a request they record a notice and a
redirect target on the response context and return False.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"

LOGIN_REQUIRED_MESSAGE = "Please log in first."
UNAUTHORIZED_MESSAGE = "Unauthorized access."
ACCOUNT_LOCKED_MESSAGE = "Your account is suspended or banned."


@dataclass(frozen=True)
class Notice:
    """A one-shot message for the next rendered response."""
    category: str
    message: str


@dataclass(frozen=True)
class RequestContext:
    """What a guard may look at: the session of the current request."""
    session: Mapping[str, Any]

    @property
    def user_id(self) -> Optional[str]:
        return self.session.get("userId")

    @property
    def role(self) -> Optional[str]:
        return self.session.get("role")


@dataclass
class ResponseContext:
    """What a guard may produce: notices and a redirect."""
    notices: list[Notice] = field(default_factory=list)
    redirect_to: Optional[str] = None

    def deny(self, message: str, redirect_to: str) -> None:
        self.notices.append(Notice(category="error", message=message))
        self.redirect_to = redirect_to


def is_authenticated(
    request: RequestContext,
    response: ResponseContext,
    login_path: str = LOGIN_PATH,
) -> bool:
    """Let the request through when the session carries a user id."""
    if request.user_id:
        return True
    response.deny(LOGIN_REQUIRED_MESSAGE, login_path)
    return False


def is_admin(
    request: RequestContext,
    response: ResponseContext,
    dashboard_path: str = DASHBOARD_PATH,
) -> bool:
    """
    Let the request through when the session role is `admin`.

    Only the role is checked; compose after `is_authenticated`.
    """
    if request.role == "admin":
        return True
    response.deny(UNAUTHORIZED_MESSAGE, dashboard_path)
    return False
