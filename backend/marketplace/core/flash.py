"""
One-shot flash notices stored in the session.

Notices are written by guards and handlers and read-and-cleared by whatever
renders the next response.
"""
from typing import MutableMapping

FLASH_SESSION_KEY = "_flashes"


def flash(session: MutableMapping, message: str, category: str = "error") -> None:
    """Queue a notice for the next rendered response."""
    notices = list(session.get(FLASH_SESSION_KEY, []))
    notices.append({"category": category, "message": message})
    session[FLASH_SESSION_KEY] = notices


def get_flashed_messages(session: MutableMapping) -> list[dict[str, str]]:
    """Return pending notices and clear them from the session."""
    return list(session.pop(FLASH_SESSION_KEY, []))
