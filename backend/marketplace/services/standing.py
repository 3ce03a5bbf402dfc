"""
Account standing rules.

Two independent axes decide what an account may do:
- lockout: the `suspended` flag and the `ban` sub-document
- visibility: a client's review `status`

Anything that depends on standing checks both.
"""
from datetime import datetime, timedelta
from typing import Optional, Union

from marketplace.models.common import as_utc, utcnow
from marketplace.models.user import Ban, Client, ClientStatus, User


def is_ban_active(ban: Ban, now: Optional[datetime] = None) -> bool:
    """
    Whether a ban currently applies.

    A ban with `days <= 0` or without a start time never expires on its own.
    """
    if not ban.active:
        return False
    if ban.days <= 0 or ban.banned_at is None:
        return True
    now = now or utcnow()
    return as_utc(ban.banned_at) + timedelta(days=ban.days) > now


def is_locked_out(user: Union[User, Client], now: Optional[datetime] = None) -> bool:
    """Whether the account is barred from logging in."""
    return user.suspended or is_ban_active(user.ban, now)


def is_publicly_visible(user: Union[User, Client], now: Optional[datetime] = None) -> bool:
    """Whether the account's listings may appear in public browse."""
    if is_locked_out(user, now):
        return False
    if isinstance(user, Client):
        return user.status == ClientStatus.APPROVED
    return True
