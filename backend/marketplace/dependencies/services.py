"""
Service providers for dependency injection.
"""
from marketplace.database.connections import get_marketplace_db
from marketplace.services.account_service import AccountService
from marketplace.services.admin_service import AdminService
from marketplace.services.contact_service import ContactService


async def get_account_service() -> AccountService:
    """Dependency to get AccountService instance."""
    return AccountService(await get_marketplace_db())


async def get_admin_service() -> AdminService:
    """Dependency to get AdminService instance."""
    return AdminService(await get_marketplace_db())


async def get_contact_service() -> ContactService:
    """Dependency to get ContactService instance."""
    return ContactService(await get_marketplace_db())
