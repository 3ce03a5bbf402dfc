"""
API Routers module.
"""
from marketplace.routers import account, admin, auth, contact, health

__all__ = ["account", "admin", "auth", "contact", "health"]
