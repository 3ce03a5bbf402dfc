"""
scripts/create_admin.py

Run this once from the project root to create the first super admin:

    python scripts/create_admin.py

You will be prompted for name, email and password. If the email already
belongs to an account, that account is promoted instead.
"""

import asyncio
import getpass
import sys

from marketplace.config import get_settings
from marketplace.database.connections import close_connections, get_mongo_client
from marketplace.database.registry import create_indexes
from marketplace.schemas.auth import RegisterRequest
from marketplace.services.account_service import AccountService
from marketplace.services.admin_service import AdminService


async def create_admin(first_name: str, email: str, password: str) -> None:
    client = await get_mongo_client()
    await create_indexes(client)
    db = client[get_settings().database_name]

    accounts = AccountService(db)
    admins = AdminService(db)

    try:
        user = await accounts.get_user_by_email(email)
        if user is None:
            user = await accounts.register_user(RegisterRequest(
                first_name=first_name,
                email=email,
                password=password,
                password_confirm=password,
            ))

        admin = await admins.bootstrap_super_admin(user.id)

        print("\n✅ Super admin ready!")
        print(f"   User ID:  {user.id}")
        print(f"   Admin ID: {admin.id}")
        print(f"   Email:    {user.email}")
        print("\nYou can now log in at /login.\n")
    except ValueError as e:
        print(f"❌ Failed: {e}")
        sys.exit(1)
    finally:
        await close_connections()


def main():
    print("\n── Create Super Admin ─────────────────────")

    first_name = input("First name: ").strip()
    email      = input("Email:      ").strip()
    password   = getpass.getpass("Password:   ").strip()

    if not all([first_name, email, password]):
        print("❌ All fields are required.")
        sys.exit(1)

    if len(password) < 8:
        print("❌ Password must be at least 8 characters.")
        sys.exit(1)

    asyncio.run(create_admin(first_name, email, password))


if __name__ == "__main__":
    main()
